"""
Local password authentication provider.
"""

from __future__ import annotations

from uuid import UUID

from jose import JWTError

from app.core.config import Settings
from app.core.security import decode_access_token
from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.user_repository import IUserRepository
from app.models.user import User, UserAccount


def account_to_user(account: UserAccount) -> User:
    return User(
        id=str(account.id),
        email=account.email,
        name=account.name,
        role=account.role,
    )


class LocalAuthProvider(IAuthProvider):
    """Local auth provider with HMAC JWT validation."""

    def __init__(self, settings: Settings, user_repo: IUserRepository):
        if not settings.JWT_SECRET:
            raise ValueError("JWT_SECRET must be set for local auth")
        self._settings = settings
        self._user_repo = user_repo

    async def verify_token(self, token: str) -> User:
        claims = decode_access_token(token, self._settings)
        subject = claims.get("sub")
        if not subject:
            raise JWTError("Missing subject")
        try:
            user_id = UUID(str(subject))
        except ValueError as exc:
            raise JWTError("Invalid subject") from exc
        account = await self._user_repo.get(user_id)
        if not account:
            raise JWTError("User not found")
        # Role comes from the stored account, not the token claim
        return account_to_user(account)
