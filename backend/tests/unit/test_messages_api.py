"""
Unit tests for portal chat endpoints and message validation.
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.api.messages import list_messages, send_message
from app.core.exceptions import InfrastructureError
from app.models.enums import UserRole
from app.models.message import Message, MessageCreate
from app.models.user import User


def _user(role: UserRole) -> User:
    return User(id=str(uuid4()), email="someone@portal.test", name="Someone", role=role)


def _stored(sender: User, payload: MessageCreate) -> Message:
    return Message(
        id=uuid4(),
        sender_id=UUID(sender.id),
        receiver_id=payload.receiver_id,
        content=payload.content,
        created_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


class TestMessageCreate:
    def test_content_is_trimmed(self):
        assert MessageCreate(content="  Any update on the landing page?  ").content == (
            "Any update on the landing page?"
        )

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_blank_content_is_rejected(self, content):
        with pytest.raises(ValidationError):
            MessageCreate(content=content)


class TestListMessages:
    @pytest.mark.asyncio
    async def test_client_sees_own_conversation(self):
        user = _user(UserRole.CLIENT)
        repo = AsyncMock()
        repo.list_for_user.return_value = []

        await list_messages(user, repo)

        repo.list_for_user.assert_awaited_once_with(UUID(user.id), include_unaddressed=False)

    @pytest.mark.asyncio
    async def test_admin_also_sees_agency_inbox(self):
        user = _user(UserRole.ADMIN)
        repo = AsyncMock()
        repo.list_for_user.return_value = []

        await list_messages(user, repo)

        repo.list_for_user.assert_awaited_once_with(UUID(user.id), include_unaddressed=True)


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_client_writes_to_agency(self):
        user = _user(UserRole.CLIENT)
        payload = MessageCreate(content="Hello team")
        repo = AsyncMock()
        repo.create.return_value = _stored(user, payload)
        user_repo = AsyncMock()

        message = await send_message(payload, user, repo, user_repo)

        assert message.receiver_id is None
        repo.create.assert_awaited_once_with(UUID(user.id), payload)
        user_repo.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_receiver(self):
        repo = AsyncMock()
        user_repo = AsyncMock()
        user_repo.get.return_value = None

        with pytest.raises(HTTPException) as exc_info:
            await send_message(
                MessageCreate(content="Hi", receiver_id=uuid4()),
                _user(UserRole.ADMIN),
                repo,
                user_repo,
            )

        assert exc_info.value.status_code == 404
        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_cannot_message_another_client(self):
        repo = AsyncMock()
        user_repo = AsyncMock()
        user_repo.get.return_value = SimpleNamespace(role=UserRole.CLIENT)

        with pytest.raises(HTTPException) as exc_info:
            await send_message(
                MessageCreate(content="Hi", receiver_id=uuid4()),
                _user(UserRole.CLIENT),
                repo,
                user_repo,
            )

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_replies_to_client(self):
        user = _user(UserRole.ADMIN)
        payload = MessageCreate(content="Launch is on track", receiver_id=uuid4())
        repo = AsyncMock()
        repo.create.return_value = _stored(user, payload)
        user_repo = AsyncMock()
        user_repo.get.return_value = SimpleNamespace(role=UserRole.CLIENT)

        message = await send_message(payload, user, repo, user_repo)

        assert message.receiver_id == payload.receiver_id

    @pytest.mark.asyncio
    async def test_storage_failure(self):
        repo = AsyncMock()
        repo.create.side_effect = InfrastructureError("locked")

        with pytest.raises(HTTPException) as exc_info:
            await send_message(MessageCreate(content="Hi"), _user(UserRole.CLIENT), repo, AsyncMock())

        assert exc_info.value.status_code == 500
