"""
Admin client management endpoints.

Provides client onboarding, profile edits, activation toggling and
milestone checklist updates.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.api.deps import AdminUser, ClientRepo, MilestoneRepo, UserRepo
from app.core.exceptions import DuplicateError, InfrastructureError, NotFoundError
from app.core.security import generate_secure_password, hash_password
from app.models.analytics import ClientDetail, ClientOverview
from app.models.client import ClientCreate, ClientProfileFields, ClientUpdate
from app.models.enums import ClientSort, ClientStatusFilter, UserRole
from app.models.milestone import Milestone, MilestoneBatchUpdate
from app.models.user import UserCreate
from app.services.client_analytics import (
    build_client_detail,
    build_client_overview,
    filter_and_sort_overviews,
)
from app.services.milestone_service import update_client_milestones
from app.services.milestone_templates import get_standard_milestones
from app.utils.datetime_utils import now_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


class ClientCreatedResponse(BaseModel):
    client: ClientDetail
    # Only returned when the password was generated server-side
    temporary_password: Optional[str] = None


class ClientStatusResponse(BaseModel):
    id: UUID
    is_active: bool


@router.get("", response_model=list[ClientOverview])
async def list_clients(
    user: AdminUser,
    repo: ClientRepo,
    status_filter: ClientStatusFilter = Query(ClientStatusFilter.ALL, alias="status"),
    sort: ClientSort = Query(ClientSort.NAME),
    search: str = Query("", max_length=200),
) -> list[ClientOverview]:
    """List clients with progress and risk, filtered and sorted."""
    now = now_utc()
    clients = await repo.list_with_milestones()
    rows = [build_client_overview(client, now) for client in clients]
    return filter_and_sort_overviews(rows, status_filter, sort, search)


@router.post("", response_model=ClientCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreate,
    user: AdminUser,
    repo: ClientRepo,
    user_repo: UserRepo,
) -> ClientCreatedResponse:
    """Create a client account with the standard milestone checklist."""
    email = payload.email.strip().lower()
    if await user_repo.get_by_email(email):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        )

    generated = None
    password = payload.password
    if not password:
        generated = generate_secure_password()
        password = generated

    account = UserCreate(
        email=email,
        name=payload.name,
        password_hash=hash_password(password),
        role=UserRole.CLIENT,
    )
    profile = ClientProfileFields(
        company_name=payload.company_name,
        industry=payload.industry,
        website=payload.website,
        phone=payload.phone,
        address=payload.address,
    )

    try:
        client = await repo.create_with_account(account, profile, get_standard_milestones())
    except DuplicateError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A user with this email already exists",
        ) from exc
    except InfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create client. Please try again.",
        ) from exc

    logger.info(f"Client {client.id} created by admin {user.id}")
    return ClientCreatedResponse(
        client=build_client_detail(client, now_utc()),
        temporary_password=generated,
    )


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: UUID,
    user: AdminUser,
    repo: ClientRepo,
) -> ClientDetail:
    """Get a client with milestones, overall progress and risk."""
    client = await repo.get(client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client {client_id} not found",
        )
    return build_client_detail(client, now_utc())


@router.patch("/{client_id}", response_model=ClientDetail)
async def update_client(
    client_id: UUID,
    payload: ClientUpdate,
    user: AdminUser,
    repo: ClientRepo,
) -> ClientDetail:
    """Update a client's details and contact name."""
    try:
        client = await repo.update(client_id, payload)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except InfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update client. Please try again.",
        ) from exc
    return build_client_detail(client, now_utc())


@router.post("/{client_id}/toggle-status", response_model=ClientStatusResponse)
async def toggle_client_status(
    client_id: UUID,
    user: AdminUser,
    repo: ClientRepo,
) -> ClientStatusResponse:
    """Flip a client between active and inactive."""
    try:
        is_active = await repo.toggle_active(client_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except InfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update client status",
        ) from exc
    return ClientStatusResponse(id=client_id, is_active=is_active)


@router.put("/{client_id}/milestones", response_model=list[Milestone])
async def update_milestones(
    client_id: UUID,
    payload: MilestoneBatchUpdate,
    user: AdminUser,
    repo: ClientRepo,
    milestone_repo: MilestoneRepo,
) -> list[Milestone]:
    """Update status, due date and notes of a client's milestones in one transaction."""
    if not await repo.get(client_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Client {client_id} not found",
        )
    try:
        return await update_client_milestones(
            client_id,
            payload.milestones,
            milestone_repo,
            author=user.name,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    except InfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update milestones",
        ) from exc
