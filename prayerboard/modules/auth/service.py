import hmac
from prayerboard.config import settings
from prayerboard.core.session import SessionState, SessionStore
from prayerboard.modules.auth.schemas import PasswordRequest, TokenResponse, SessionResponse
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _matches(submitted: str, expected: str) -> bool:
    # An unset password never matches
    if not expected:
        return False
    return hmac.compare_digest(submitted.encode(), expected.encode())


class AuthService:
    def __init__(self, store: SessionStore):
        self.store = store

    def verify_site_password(self, password: str) -> bool:
        return _matches(password, settings.site_password)

    def verify_admin_password(self, password: str) -> bool:
        return _matches(password, settings.admin_password)

    def login(self, login_data: PasswordRequest) -> TokenResponse:
        """Open a session with the shared site password"""
        if not self.verify_site_password(login_data.password):
            logger.warning("Site login failed: wrong password")
            raise HTTPException(status_code=401, detail="비밀번호가 올바르지 않습니다")
        self.store.purge_expired()
        session = self.store.create()
        return TokenResponse(access_token=session.token, expires_at=session.expires_at)

    def enter_admin_mode(self, session: SessionState, login_data: PasswordRequest) -> TokenResponse:
        """Switch an authenticated session into admin mode"""
        if not self.verify_admin_password(login_data.password):
            logger.warning("Admin login failed: wrong password")
            raise HTTPException(status_code=401, detail="관리자 비밀번호가 올바르지 않습니다")
        session.is_admin = True
        return TokenResponse(access_token=session.token, expires_at=session.expires_at, is_admin=True)

    def leave_admin_mode(self, session: SessionState) -> SessionResponse:
        session.is_admin = False
        return self.describe(session)

    def logout(self, session: SessionState) -> bool:
        return self.store.clear(session.token)

    def describe(self, session: SessionState) -> SessionResponse:
        return SessionResponse(
            is_authenticated=session.is_authenticated,
            is_admin=session.is_admin,
            expires_at=session.expires_at
        )
