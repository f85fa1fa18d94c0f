"""
Integration tests for the SQLite message repository.
"""

import pytest

from app.infrastructure.local.message_repository import SqliteMessageRepository
from app.infrastructure.local.user_repository import SqliteUserRepository
from app.models.enums import UserRole
from app.models.message import MessageCreate
from app.models.user import UserCreate


@pytest.fixture
def message_repo(session_factory):
    return SqliteMessageRepository(session_factory=session_factory)


@pytest.fixture
async def users(session_factory):
    repo = SqliteUserRepository(session_factory=session_factory)
    admin = await repo.create(
        UserCreate(email="admin@portal.test", name="Jordan", password_hash="x", role=UserRole.ADMIN)
    )
    acme = await repo.create(
        UserCreate(email="owner@acme.test", name="Sam Lee", password_hash="x", role=UserRole.CLIENT)
    )
    beta = await repo.create(
        UserCreate(email="owner@beta.test", name="Alex Kim", password_hash="x", role=UserRole.CLIENT)
    )
    return admin, acme, beta


@pytest.mark.asyncio
async def test_create_includes_sender(message_repo, users):
    _, acme, _ = users
    message = await message_repo.create(acme.id, MessageCreate(content="Hello team"))

    assert message.sender_id == acme.id
    assert message.receiver_id is None
    assert message.sender.name == "Sam Lee"
    assert message.sender.email == "owner@acme.test"


@pytest.mark.asyncio
async def test_conversation_visibility(message_repo, users):
    admin, acme, beta = users
    await message_repo.create(acme.id, MessageCreate(content="From Acme"))
    await message_repo.create(beta.id, MessageCreate(content="From Beta"))
    await message_repo.create(admin.id, MessageCreate(content="Reply to Acme", receiver_id=acme.id))

    acme_view = await message_repo.list_for_user(acme.id)
    admin_view = await message_repo.list_for_user(admin.id, include_unaddressed=True)
    admin_own = await message_repo.list_for_user(admin.id)

    assert [m.content for m in acme_view] == ["From Acme", "Reply to Acme"]
    assert [m.content for m in admin_view] == ["From Acme", "From Beta", "Reply to Acme"]
    assert [m.content for m in admin_own] == ["Reply to Acme"]
