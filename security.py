import logging
from typing import Optional

from fastapi import Request
from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from models import ROLES, ROLE_USER, User
from schemas import SessionUser
from errors import UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Legacy plaintext or otherwise unrecognised value in the password column
        logger.warning("Stored password is not a recognised hash; rejecting login")
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class SessionManager:
    """Cookie-session login for marketing users.

    The session payload is the {id, email, role} projection stored under
    SESSION_KEY. When `enabled` is False the app runs without authentication
    and no session middleware is installed.
    """

    SESSION_KEY = "user"

    def __init__(self, session_factory, enabled: bool = True):
        self.session_factory = session_factory
        self.enabled = enabled

    def authenticate(self, email: str, password: str) -> SessionUser:
        with self.session_factory() as db:
            user = db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

            if not user or not user.active:
                logger.info(f"Login rejected for {email}: unknown or inactive user")
                raise UnauthorizedError("Invalid credentials")

            if not verify_password(password, user.password):
                logger.info(f"Login rejected for {email}: wrong password")
                raise UnauthorizedError("Invalid credentials")

            return SessionUser.model_validate(user)

    def login(self, request: Request, email: str, password: str) -> SessionUser:
        user = self.authenticate(email, password)
        request.session[self.SESSION_KEY] = user.model_dump()
        logger.info(f"User {user.id} logged in with role {user.role}")
        return user

    def logout(self, request: Request):
        if self.enabled:
            request.session.clear()

    def current_user(self, request: Request) -> Optional[SessionUser]:
        data = request.session.get(self.SESSION_KEY)
        if not data:
            return None
        return SessionUser(**data)

    def create_user(self, email: str, password: str, role: str = ROLE_USER, active: bool = True) -> SessionUser:
        if not email or not password:
            raise ValidationError("Email and password are required.")
        if role not in ROLES:
            raise ValidationError(f"Unknown role {role!r}; expected one of {', '.join(ROLES)}")

        try:
            email = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValidationError(f"Invalid email {email!r}: {e}")

        with self.session_factory() as db:
            # Login matches emails case-insensitively, so uniqueness does too
            taken = db.query(User.id).filter(func.lower(User.email) == email.lower()).first()
            if taken:
                raise ValidationError(f"Email already registered: {email}")

            user = User(
                email=email,
                password=get_password_hash(password),
                role=role,
                active=active,
            )
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ValidationError(f"Email already registered: {email}")
            db.refresh(user)
            logger.info(f"Provisioned user {user.id} ({email}) with role {role}")
            return SessionUser.model_validate(user)
