"""
Milestone update service.

Applies admin edits to a client's milestones: status transition date side
effects, note appends and progress recalculation, persisted atomically.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from app.core.exceptions import NotFoundError
from app.interfaces.milestone_repository import IMilestoneRepository
from app.models.enums import MilestoneStatus
from app.models.milestone import (
    Milestone,
    MilestoneNote,
    MilestonePatch,
    MilestoneUpdateItem,
)
from app.services.progress_calculator import calculate_milestone_progress
from app.utils.datetime_utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def apply_milestone_update(
    current: Milestone,
    update: MilestoneUpdateItem,
    now: datetime,
    author: str,
) -> MilestonePatch:
    """
    Resolve the stored values for one milestone after an admin edit.

    Transition rules:
    - into IN_PROGRESS: start_date is set to now unless already present
    - into NOT_STARTED: start_date and completed_at are cleared
    - into COMPLETED: completed_at is set to now

    Progress is always recomputed from the resulting status and dates.
    """
    new_status = update.status
    start_date = current.start_date
    completed_at = current.completed_at

    if new_status == MilestoneStatus.IN_PROGRESS and current.status != MilestoneStatus.IN_PROGRESS:
        if start_date is None:
            start_date = now

    if new_status == MilestoneStatus.NOT_STARTED:
        start_date = None
        completed_at = None

    if new_status == MilestoneStatus.COMPLETED and current.status != MilestoneStatus.COMPLETED:
        completed_at = now

    notes = list(current.notes)
    if update.new_note and update.new_note.strip():
        notes.append(
            MilestoneNote(
                content=update.new_note.strip(),
                created_at=now,
                created_by=author,
            )
        )

    due_date = ensure_utc(update.due_date)
    progress = calculate_milestone_progress(new_status, start_date, due_date, now=now)

    return MilestonePatch(
        id=current.id,
        status=new_status,
        start_date=start_date,
        due_date=due_date,
        completed_at=completed_at,
        progress=progress,
        notes=notes,
    )


async def update_client_milestones(
    client_id: UUID,
    updates: list[MilestoneUpdateItem],
    repo: IMilestoneRepository,
    author: str,
    now: Optional[datetime] = None,
) -> list[Milestone]:
    """
    Apply a batch of milestone edits for one client in a single transaction.

    Raises:
        NotFoundError: If any update refers to a milestone the client does not own
    """
    reference = ensure_utc(now) if now is not None else now_utc()
    current_by_id = {m.id: m for m in await repo.list_by_client(client_id)}

    patches: list[MilestonePatch] = []
    for update in updates:
        current = current_by_id.get(update.id)
        if current is None:
            raise NotFoundError(f"Milestone {update.id} not found")
        patches.append(apply_milestone_update(current, update, reference, author))

    if not patches:
        return list(current_by_id.values())

    logger.info(f"Updating {len(patches)} milestone(s) for client {client_id}")
    return await repo.apply_patches(client_id, patches)
