"""
SQLite implementation of chat settings repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from sqlalchemy import select

from app.infrastructure.local.database import ChatSettingsORM, get_session_factory
from app.interfaces.settings_repository import IChatSettingsRepository
from app.models.settings import ChatSettings, ChatSettingsUpdate
from app.utils.datetime_utils import ensure_utc, now_utc


class SqliteChatSettingsRepository(IChatSettingsRepository):
    """SQLite implementation of the singleton chat settings row."""

    def __init__(self, session_factory=None):
        self._session_factory_override = session_factory

    @property
    def _session_factory(self):
        # Looked up on every use; dispose_db() replaces the global factory
        return self._session_factory_override or get_session_factory()

    def _orm_to_model(self, orm: ChatSettingsORM) -> ChatSettings:
        return ChatSettings(
            whatsapp_number=orm.whatsapp_number,
            telegram_username=orm.telegram_username,
            updated_at=ensure_utc(orm.updated_at),
        )

    async def get(self) -> Optional[ChatSettings]:
        async with self._session_factory() as session:
            result = await session.execute(select(ChatSettingsORM).limit(1))
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def upsert(self, data: ChatSettingsUpdate) -> ChatSettings:
        async with self._session_factory() as session:
            result = await session.execute(select(ChatSettingsORM).limit(1))
            orm = result.scalar_one_or_none()
            if orm is None:
                orm = ChatSettingsORM(id=str(uuid4()))
                session.add(orm)

            orm.whatsapp_number = data.whatsapp_number
            orm.telegram_username = data.telegram_username
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)
