from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool
from schemas import UserLogin, SessionUser, Success
from security import SessionManager
from dependencies import get_current_user, get_session_manager
from errors import translate_store_errors

router = APIRouter()

@router.post("/login", response_model=SessionUser)
async def login(
    user_credentials: UserLogin,
    request: Request,
    sessions: SessionManager = Depends(get_session_manager)
):
    with translate_store_errors("Internal error"):
        return await run_in_threadpool(
            sessions.login, request, user_credentials.email, user_credentials.password
        )

@router.post("/logout", response_model=Success)
async def logout(request: Request, sessions: SessionManager = Depends(get_session_manager)):
    sessions.logout(request)
    return Success()

@router.get("/me", response_model=SessionUser)
async def read_users_me(current_user: SessionUser = Depends(get_current_user)):
    """
    Get the user stored in the current session
    """
    return current_user
