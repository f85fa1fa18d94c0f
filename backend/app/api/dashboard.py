"""
Client dashboard endpoints.

Read-only views of the signed-in client's own engagement.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import ChatSettingsRepo, ClientRepo, ClientUser
from app.models.analytics import ClientProgress
from app.models.client import ClientWithMilestones
from app.models.settings import ChatLinks
from app.models.user import User
from app.services.chat_links import build_chat_links
from app.services.progress_calculator import (
    calculate_overall_progress,
    count_completed,
    format_week_level,
    get_active_milestone,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


async def _get_own_client(user: User, repo: ClientRepo) -> ClientWithMilestones:
    client = await repo.get_by_user_id(UUID(user.id))
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client profile not found",
        )
    return client


@router.get("/progress", response_model=ClientProgress)
async def get_my_progress(user: ClientUser, repo: ClientRepo) -> ClientProgress:
    """Milestones, overall progress and the milestone currently in focus."""
    client = await _get_own_client(user, repo)
    active = get_active_milestone(client.milestones)
    return ClientProgress(
        client_id=client.id,
        company_name=client.company_name,
        overall_progress=calculate_overall_progress(client.milestones),
        completed_milestones=count_completed(client.milestones),
        total_milestones=len(client.milestones),
        active_milestone=active,
        active_due_week=format_week_level(active.due_date if active else None),
        milestones=client.milestones,
    )


@router.get("/chat-links", response_model=ChatLinks)
async def get_my_chat_links(
    user: ClientUser,
    repo: ClientRepo,
    settings_repo: ChatSettingsRepo,
) -> ChatLinks:
    client = await _get_own_client(user, repo)
    settings = await settings_repo.get()
    return build_chat_links(settings, client.contact_name or user.name, client.company_name)
