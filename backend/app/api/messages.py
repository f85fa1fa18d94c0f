"""
Portal chat endpoints.

Clients write to the agency; admins read everything addressed to the agency
and can reply to a specific client user.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from app.api.deps import CurrentUser, MessageRepo, UserRepo
from app.core.exceptions import InfrastructureError
from app.models.enums import UserRole
from app.models.message import Message, MessageCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[Message])
async def list_messages(user: CurrentUser, repo: MessageRepo) -> list[Message]:
    """Messages the user sent or received, oldest first."""
    return await repo.list_for_user(UUID(user.id), include_unaddressed=user.is_admin)


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: MessageCreate,
    user: CurrentUser,
    repo: MessageRepo,
    user_repo: UserRepo,
) -> Message:
    """Send a message to the agency, or to a specific user."""
    if payload.receiver_id:
        receiver = await user_repo.get(payload.receiver_id)
        if not receiver:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"User {payload.receiver_id} not found",
            )
        if not user.is_admin and receiver.role != UserRole.ADMIN:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Clients can only message the agency",
            )

    try:
        message = await repo.create(UUID(user.id), payload)
    except InfrastructureError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to send message",
        ) from exc

    logger.info(f"Message {message.id} sent by {user.id}")
    return message
