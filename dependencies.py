from typing import Optional

from fastapi import Depends, Request

from models import ROLE_ADMIN
from schemas import SessionUser
from event_store import EventStore
from security import SessionManager
from errors import ForbiddenError, UnauthorizedError

def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store

def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager

def get_current_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager)
) -> Optional[SessionUser]:
    """Require a logged-in user. Yields None when authentication is disabled."""
    if not sessions.enabled:
        return None

    user = sessions.current_user(request)
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user

def get_current_admin_user(
    request: Request,
    sessions: SessionManager = Depends(get_session_manager)
) -> Optional[SessionUser]:
    current_user = get_current_user(request, sessions)
    if current_user is None:
        return None

    if current_user.role != ROLE_ADMIN:
        raise ForbiddenError("Not enough permissions (admin required)")
    return current_user
