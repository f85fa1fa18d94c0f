"""
Startup bootstrap for the first admin account.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.core.config import Settings
from app.core.security import hash_password
from app.interfaces.user_repository import IUserRepository
from app.models.enums import UserRole
from app.models.user import UserAccount, UserCreate

logger = logging.getLogger(__name__)


async def ensure_admin_account(
    user_repo: IUserRepository,
    settings: Settings,
) -> Optional[UserAccount]:
    """
    Create the configured admin account if it does not exist yet.

    Does nothing unless both BOOTSTRAP_ADMIN_EMAIL and BOOTSTRAP_ADMIN_PASSWORD
    are set. An existing account with that email is left untouched.
    """
    email = settings.BOOTSTRAP_ADMIN_EMAIL.strip().lower()
    if not email or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return None

    existing = await user_repo.get_by_email(email)
    if existing:
        if existing.role != UserRole.ADMIN:
            logger.warning(f"Bootstrap admin {email} exists with role {existing.role.value}")
        return existing

    account = await user_repo.create(
        UserCreate(
            email=email,
            name=settings.BOOTSTRAP_ADMIN_NAME,
            password_hash=hash_password(settings.BOOTSTRAP_ADMIN_PASSWORD),
            role=UserRole.ADMIN,
        )
    )
    logger.info(f"Created bootstrap admin account {email}")
    return account
