"""
SQLite implementation of Milestone repository.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import InfrastructureError, NotFoundError
from app.infrastructure.local.database import MilestoneORM, get_session_factory
from app.interfaces.milestone_repository import IMilestoneRepository
from app.models.enums import MilestoneStatus
from app.models.milestone import Milestone, MilestonePatch, normalize_notes
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def milestone_orm_to_model(orm: MilestoneORM) -> Milestone:
    """Convert ORM object to Pydantic model, migrating legacy notes."""
    updated_at = ensure_utc(orm.updated_at)
    return Milestone(
        id=UUID(orm.id),
        client_id=UUID(orm.client_id),
        title=orm.title,
        description=orm.description,
        status=MilestoneStatus(orm.status),
        start_date=ensure_utc(orm.start_date),
        due_date=ensure_utc(orm.due_date),
        completed_at=ensure_utc(orm.completed_at),
        progress=orm.progress or 0,
        order=orm.order,
        notes=normalize_notes(orm.notes, orm.id, updated_at),
        created_at=ensure_utc(orm.created_at),
        updated_at=updated_at,
    )


class SqliteMilestoneRepository(IMilestoneRepository):
    """SQLite implementation of milestone repository."""

    def __init__(self, session_factory=None):
        """
        Initialize repository.

        Args:
            session_factory: Optional session factory (for testing)
        """
        self._session_factory_override = session_factory

    @property
    def _session_factory(self):
        # Looked up on every use; dispose_db() replaces the global factory
        return self._session_factory_override or get_session_factory()

    async def list_by_client(self, client_id: UUID) -> list[Milestone]:
        """List a client's milestones ordered by position."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(MilestoneORM)
                .where(MilestoneORM.client_id == str(client_id))
                .order_by(MilestoneORM.order)
            )
            return [milestone_orm_to_model(orm) for orm in result.scalars().all()]

    async def apply_patches(self, client_id: UUID, patches: list[MilestonePatch]) -> list[Milestone]:
        """Persist resolved milestone values in one transaction."""
        async with self._session_factory() as session:
            try:
                for patch in patches:
                    result = await session.execute(
                        select(MilestoneORM).where(
                            and_(
                                MilestoneORM.id == str(patch.id),
                                MilestoneORM.client_id == str(client_id),
                            )
                        )
                    )
                    orm = result.scalar_one_or_none()
                    if not orm:
                        raise NotFoundError(f"Milestone {patch.id} not found")

                    orm.status = patch.status.value
                    orm.start_date = patch.start_date
                    orm.due_date = patch.due_date
                    orm.completed_at = patch.completed_at
                    orm.progress = patch.progress
                    orm.notes = [note.model_dump(mode="json") for note in patch.notes]
                    orm.updated_at = now_utc()

                await session.commit()
            except NotFoundError:
                await session.rollback()
                raise
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(f"Failed to update milestones for client {client_id}: {exc}")
                raise InfrastructureError("Failed to update milestones") from exc

            result = await session.execute(
                select(MilestoneORM)
                .where(MilestoneORM.client_id == str(client_id))
                .order_by(MilestoneORM.order)
            )
            return [milestone_orm_to_model(orm) for orm in result.scalars().all()]
