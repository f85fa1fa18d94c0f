"""
SQLite implementation of Client repository.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import DuplicateError, InfrastructureError, NotFoundError
from app.infrastructure.local.database import (
    ClientORM,
    MilestoneORM,
    UserORM,
    get_session_factory,
)
from app.infrastructure.local.milestone_repository import milestone_orm_to_model
from app.interfaces.client_repository import IClientRepository
from app.models.client import ClientProfileFields, ClientUpdate, ClientWithMilestones
from app.models.milestone import MilestoneCreate
from app.models.user import UserCreate
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


class SqliteClientRepository(IClientRepository):
    """SQLite implementation of client repository."""

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

    def _orm_to_model(
        self,
        client: ClientORM,
        user: UserORM | None,
        milestones: list[MilestoneORM],
    ) -> ClientWithMilestones:
        return ClientWithMilestones(
            id=UUID(client.id),
            user_id=UUID(client.user_id),
            company_name=client.company_name,
            industry=client.industry,
            website=client.website,
            phone=client.phone,
            address=client.address,
            is_active=bool(client.is_active),
            contact_name=user.name if user else None,
            contact_email=user.email if user else None,
            created_at=ensure_utc(client.created_at),
            updated_at=ensure_utc(client.updated_at),
            milestones=[milestone_orm_to_model(m) for m in milestones],
        )

    async def _load(self, session, *conditions) -> list[ClientWithMilestones]:
        stmt = (
            select(ClientORM, UserORM)
            .join(UserORM, UserORM.id == ClientORM.user_id, isouter=True)
            .order_by(ClientORM.created_at.desc())
        )
        if conditions:
            stmt = stmt.where(*conditions)
        result = await session.execute(stmt)
        rows = result.all()
        if not rows:
            return []

        client_ids = [client.id for client, _ in rows]
        milestone_result = await session.execute(
            select(MilestoneORM)
            .where(MilestoneORM.client_id.in_(client_ids))
            .order_by(MilestoneORM.client_id, MilestoneORM.order)
        )
        milestones_by_client: dict[str, list[MilestoneORM]] = {}
        for milestone in milestone_result.scalars().all():
            milestones_by_client.setdefault(milestone.client_id, []).append(milestone)

        return [
            self._orm_to_model(client, user, milestones_by_client.get(client.id, []))
            for client, user in rows
        ]

    async def create_with_account(
        self,
        user: UserCreate,
        profile: ClientProfileFields,
        milestones: list[MilestoneCreate],
    ) -> ClientWithMilestones:
        """Create user + client + milestones in a single transaction."""
        async with self._session_factory() as session:
            user_id = str(uuid4())
            client_id = str(uuid4())
            session.add(
                UserORM(
                    id=user_id,
                    email=user.email.strip().lower(),
                    name=user.name,
                    password_hash=user.password_hash,
                    role=user.role.value,
                )
            )
            session.add(
                ClientORM(
                    id=client_id,
                    user_id=user_id,
                    company_name=profile.company_name,
                    industry=profile.industry,
                    website=profile.website,
                    phone=profile.phone,
                    address=profile.address,
                    is_active=True,
                )
            )
            for milestone in milestones:
                session.add(
                    MilestoneORM(
                        id=str(uuid4()),
                        client_id=client_id,
                        title=milestone.title,
                        description=milestone.description,
                        order=milestone.order,
                        status=milestone.status.value,
                        progress=milestone.progress,
                        due_date=milestone.due_date,
                        notes=[],
                    )
                )
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise DuplicateError(f"A user with email {user.email} already exists") from exc
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(f"Failed to create client {profile.company_name}: {exc}")
                raise InfrastructureError("Failed to create client") from exc

            clients = await self._load(session, ClientORM.id == client_id)
            return clients[0]

    async def get(self, client_id: UUID) -> Optional[ClientWithMilestones]:
        async with self._session_factory() as session:
            clients = await self._load(session, ClientORM.id == str(client_id))
            return clients[0] if clients else None

    async def get_by_user_id(self, user_id: UUID) -> Optional[ClientWithMilestones]:
        async with self._session_factory() as session:
            clients = await self._load(session, ClientORM.user_id == str(user_id))
            return clients[0] if clients else None

    async def list_with_milestones(self) -> list[ClientWithMilestones]:
        async with self._session_factory() as session:
            return await self._load(session)

    async def update(self, client_id: UUID, update: ClientUpdate) -> ClientWithMilestones:
        """Update client details and the owning user's name together."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ClientORM).where(ClientORM.id == str(client_id))
            )
            client = result.scalar_one_or_none()
            if not client:
                raise NotFoundError(f"Client {client_id} not found")

            client.company_name = update.company_name
            client.industry = update.industry
            client.website = update.website
            client.phone = update.phone
            client.address = update.address
            client.updated_at = now_utc()

            user_result = await session.execute(
                select(UserORM).where(UserORM.id == client.user_id)
            )
            user = user_result.scalar_one_or_none()
            if user:
                user.name = update.name
                user.updated_at = now_utc()

            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(f"Failed to update client {client_id}: {exc}")
                raise InfrastructureError("Failed to update client") from exc

            clients = await self._load(session, ClientORM.id == str(client_id))
            return clients[0]

    async def toggle_active(self, client_id: UUID) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(ClientORM).where(ClientORM.id == str(client_id))
            )
            client = result.scalar_one_or_none()
            if not client:
                raise NotFoundError(f"Client {client_id} not found")

            client.is_active = not client.is_active
            client.updated_at = now_utc()
            try:
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error(f"Failed to toggle status of client {client_id}: {exc}")
                raise InfrastructureError("Failed to update client status") from exc
            return bool(client.is_active)
