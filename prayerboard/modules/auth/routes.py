from fastapi import APIRouter, Depends, Request
from prayerboard.core.dependencies import get_current_session
from prayerboard.core.session import SessionState, SessionStore, get_session_store
from prayerboard.modules.auth.schemas import PasswordRequest, TokenResponse, SessionResponse
from prayerboard.modules.auth.service import AuthService
from prayerboard.config import settings
from prayerboard.core.rate_limit import limiter

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(store: SessionStore = Depends(get_session_store)) -> AuthService:
    return AuthService(store)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    login_data: PasswordRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Enter the site with the shared password and get a session token"""
    return service.login(login_data)


@router.post("/admin-login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
async def admin_login(
    request: Request,
    login_data: PasswordRequest,
    session: SessionState = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service)
):
    """Switch the current session into admin mode"""
    return service.enter_admin_mode(session, login_data)


@router.post("/admin-logout", response_model=SessionResponse)
async def admin_logout(
    session: SessionState = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service)
):
    """Leave admin mode but stay logged in"""
    return service.leave_admin_mode(session)


@router.post("/logout", status_code=200)
async def logout(
    session: SessionState = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service)
):
    """End the session"""
    service.logout(session)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=SessionResponse)
async def me(
    session: SessionState = Depends(get_current_session),
    service: AuthService = Depends(get_auth_service)
):
    """Current session flags (for frontend UI)"""
    return service.describe(session)
