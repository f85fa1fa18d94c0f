"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from jose import JWTError

from app.core.config import get_settings
from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.client_repository import IClientRepository
from app.interfaces.message_repository import IMessageRepository
from app.interfaces.milestone_repository import IMilestoneRepository
from app.interfaces.settings_repository import IChatSettingsRepository
from app.interfaces.user_repository import IUserRepository
from app.models.enums import UserRole
from app.models.user import User


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_user_repository() -> IUserRepository:
    """Get user repository instance."""
    from app.infrastructure.local.user_repository import SqliteUserRepository
    return SqliteUserRepository()


@lru_cache()
def get_client_repository() -> IClientRepository:
    """Get client repository instance."""
    from app.infrastructure.local.client_repository import SqliteClientRepository
    return SqliteClientRepository()


@lru_cache()
def get_milestone_repository() -> IMilestoneRepository:
    """Get milestone repository instance."""
    from app.infrastructure.local.milestone_repository import SqliteMilestoneRepository
    return SqliteMilestoneRepository()


@lru_cache()
def get_message_repository() -> IMessageRepository:
    """Get message repository instance."""
    from app.infrastructure.local.message_repository import SqliteMessageRepository
    return SqliteMessageRepository()


@lru_cache()
def get_chat_settings_repository() -> IChatSettingsRepository:
    """Get chat settings repository instance."""
    from app.infrastructure.local.settings_repository import SqliteChatSettingsRepository
    return SqliteChatSettingsRepository()


# ===========================================
# Provider Dependencies
# ===========================================


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    from app.infrastructure.auth.local_auth import LocalAuthProvider

    return LocalAuthProvider(get_settings(), get_user_repository())


# ===========================================
# User Authentication
# ===========================================


def _extract_token(authorization: str | None, session_token: str | None) -> str:
    if authorization:
        parts = authorization.strip().split(" ", 1)
        if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authorization header format",
            )
        return parts[1].strip()
    if session_token:
        return session_token
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
    )


async def get_session_token(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Read the session token from the Authorization header or session cookie.

    The header wins when both are present.
    """
    session_token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    return _extract_token(authorization, session_token)


async def get_current_user(
    token: Annotated[str, Depends(get_session_token)],
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """Get current authenticated user."""
    try:
        return await auth_provider.verify_token(token)
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


async def require_admin(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only ADMIN users."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


async def require_client(user: Annotated[User, Depends(get_current_user)]) -> User:
    """Allow only CLIENT users."""
    if user.role != UserRole.CLIENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Client access required",
        )
    return user


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

UserRepo = Annotated[IUserRepository, Depends(get_user_repository)]
ClientRepo = Annotated[IClientRepository, Depends(get_client_repository)]
MilestoneRepo = Annotated[IMilestoneRepository, Depends(get_milestone_repository)]
ChatSettingsRepo = Annotated[IChatSettingsRepository, Depends(get_chat_settings_repository)]
MessageRepo = Annotated[IMessageRepository, Depends(get_message_repository)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
ClientUser = Annotated[User, Depends(require_client)]
