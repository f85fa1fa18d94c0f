"""
Admin chat settings endpoints.

WhatsApp/Telegram contact details shown to clients.
"""

from fastapi import APIRouter

from app.api.deps import AdminUser, ChatSettingsRepo
from app.models.settings import ChatSettings, ChatSettingsUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/chat", response_model=ChatSettings)
async def get_chat_settings(user: AdminUser, repo: ChatSettingsRepo) -> ChatSettings:
    settings = await repo.get()
    return settings or ChatSettings()


@router.put("/chat", response_model=ChatSettings)
async def update_chat_settings(
    payload: ChatSettingsUpdate,
    user: AdminUser,
    repo: ChatSettingsRepo,
) -> ChatSettings:
    """Create or replace the chat settings. Blank values clear a channel."""
    return await repo.upsert(payload)
