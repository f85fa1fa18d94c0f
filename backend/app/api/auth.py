"""
Authentication endpoints (login/logout/me).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from app.api.deps import CurrentUser, UserRepo
from app.core.config import Settings, get_settings
from app.core.security import create_access_token, verify_password
from app.infrastructure.auth.local_auth import account_to_user
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


def _normalize_email(value: str) -> str:
    return value.strip().lower()


def _set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, response: Response, repo: UserRepo) -> AuthResponse:
    """Exchange email + password for a session token (also set as a cookie)."""
    settings = get_settings()
    account = await repo.get_by_email(_normalize_email(payload.email))
    if not account or not verify_password(payload.password, account.password_hash):
        logger.info(f"Failed login for {_normalize_email(payload.email)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_access_token(str(account.id), account.role.value, settings)
    _set_session_cookie(response, token, settings)
    return AuthResponse(access_token=token, user=account_to_user(account))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> None:
    """Clear the session cookie."""
    response.delete_cookie(get_settings().SESSION_COOKIE_NAME)


@router.get("/me", response_model=User)
async def me(user: CurrentUser) -> User:
    return user
