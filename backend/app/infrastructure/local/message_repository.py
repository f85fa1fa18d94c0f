"""
SQLite implementation of Message repository.
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InfrastructureError
from app.infrastructure.local.database import MessageORM, UserORM, get_session_factory
from app.interfaces.message_repository import IMessageRepository
from app.models.message import Message, MessageCreate, MessageSender
from app.utils.datetime_utils import ensure_utc

logger = logging.getLogger(__name__)


def message_orm_to_model(orm: MessageORM, sender: UserORM | None) -> Message:
    return Message(
        id=UUID(orm.id),
        sender_id=UUID(orm.sender_id),
        receiver_id=UUID(orm.receiver_id) if orm.receiver_id else None,
        content=orm.content,
        created_at=ensure_utc(orm.created_at),
        sender=(
            MessageSender(id=UUID(sender.id), name=sender.name, email=sender.email)
            if sender
            else None
        ),
    )


class SqliteMessageRepository(IMessageRepository):
    """SQLite implementation of message repository."""

    def __init__(self, session_factory=None):
        self._session_factory_override = session_factory

    @property
    def _session_factory(self):
        # Looked up on every use; dispose_db() replaces the global factory
        return self._session_factory_override or get_session_factory()

    def _select_with_sender(self):
        return select(MessageORM, UserORM).join(
            UserORM, UserORM.id == MessageORM.sender_id, isouter=True
        )

    async def list_for_user(self, user_id: UUID, include_unaddressed: bool = False) -> list[Message]:
        conditions = [
            MessageORM.sender_id == str(user_id),
            MessageORM.receiver_id == str(user_id),
        ]
        if include_unaddressed:
            conditions.append(MessageORM.receiver_id.is_(None))

        async with self._session_factory() as session:
            result = await session.execute(
                self._select_with_sender()
                .where(or_(*conditions))
                .order_by(MessageORM.created_at.asc())
            )
            return [message_orm_to_model(orm, sender) for orm, sender in result.all()]

    async def create(self, sender_id: UUID, data: MessageCreate) -> Message:
        async with self._session_factory() as session:
            message_id = str(uuid4())
            session.add(
                MessageORM(
                    id=message_id,
                    sender_id=str(sender_id),
                    receiver_id=str(data.receiver_id) if data.receiver_id else None,
                    content=data.content,
                )
            )
            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(f"Failed to store message from {sender_id}: {exc}")
                raise InfrastructureError("Failed to send message") from exc

            result = await session.execute(
                self._select_with_sender().where(MessageORM.id == message_id)
            )
            orm, sender = result.one()
            return message_orm_to_model(orm, sender)
