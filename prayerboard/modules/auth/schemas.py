from pydantic import BaseModel
from datetime import datetime


class PasswordRequest(BaseModel):
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    is_admin: bool = False


class SessionResponse(BaseModel):
    is_authenticated: bool
    is_admin: bool
    expires_at: datetime
