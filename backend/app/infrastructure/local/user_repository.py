"""
SQLite implementation of user repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import DuplicateError
from app.infrastructure.local.database import UserORM, get_session_factory
from app.interfaces.user_repository import IUserRepository
from app.models.enums import UserRole
from app.models.user import UserAccount, UserCreate
from app.utils.datetime_utils import ensure_utc


def user_orm_to_model(orm: UserORM) -> UserAccount:
    return UserAccount(
        id=UUID(orm.id),
        email=orm.email,
        name=orm.name,
        password_hash=orm.password_hash,
        role=UserRole(orm.role),
        created_at=ensure_utc(orm.created_at),
        updated_at=ensure_utc(orm.updated_at),
    )


class SqliteUserRepository(IUserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, session_factory=None):
        self._session_factory_override = session_factory

    @property
    def _session_factory(self):
        # Looked up on every use; dispose_db() replaces the global factory
        return self._session_factory_override or get_session_factory()

    async def get(self, user_id: UUID) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.id == str(user_id))
            )
            orm = result.scalar_one_or_none()
            return user_orm_to_model(orm) if orm else None

    async def get_by_email(self, email: str) -> Optional[UserAccount]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserORM).where(UserORM.email == email.strip().lower())
            )
            orm = result.scalar_one_or_none()
            return user_orm_to_model(orm) if orm else None

    async def create(self, data: UserCreate) -> UserAccount:
        async with self._session_factory() as session:
            orm = UserORM(
                id=str(uuid4()),
                email=data.email.strip().lower(),
                name=data.name,
                password_hash=data.password_hash,
                role=data.role.value,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateError(f"A user with email {orm.email} already exists") from exc
            await session.refresh(orm)
            return user_orm_to_model(orm)
