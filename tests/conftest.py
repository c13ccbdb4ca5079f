import pytest
from fastapi.testclient import TestClient

from database import Settings, build_engine, build_session_factory, init_db
from event_store import EventStore
from security import SessionManager
from main import create_app

ADMIN_EMAIL = "admin@example.com"
USER_EMAIL = "editor@example.com"
PASSWORD = "s3cret-pass"


def make_settings(**overrides):
    values = dict(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret",
        ENVIRONMENT="development",
        AUTH_ENABLED=True,
        STATIC_DIR="",
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def session_factory():
    engine = build_engine(make_settings())
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return EventStore(session_factory)


@pytest.fixture
def sessions(session_factory):
    return SessionManager(session_factory)


@pytest.fixture
def client():
    app = create_app(make_settings())
    with TestClient(app) as c:
        sessions = app.state.session_manager
        sessions.create_user(ADMIN_EMAIL, PASSWORD, role="admin")
        sessions.create_user(USER_EMAIL, PASSWORD, role="user")
        sessions.create_user("gone@example.com", PASSWORD, role="admin", active=False)
        yield c


@pytest.fixture
def open_client():
    app = create_app(make_settings(AUTH_ENABLED=False))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(email=ADMIN_EMAIL, password=PASSWORD):
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _login


@pytest.fixture
def production_client():
    app = create_app(make_settings(ENVIRONMENT="production", SESSION_MAX_AGE=3600))
    with TestClient(app, base_url="https://testserver") as c:
        app.state.session_manager.create_user(ADMIN_EMAIL, PASSWORD, role="admin")
        yield c
