"""
Milestone model definitions.

Milestones belong to a client and track one phase of the engagement.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import NAMESPACE_URL, UUID, uuid4, uuid5

from pydantic import AliasChoices, BaseModel, Field

from app.models.enums import MilestoneStatus

LEGACY_NOTE_AUTHOR = "legacy"


class MilestoneNote(BaseModel):
    """A single changelog entry on a milestone."""

    id: UUID = Field(default_factory=uuid4)
    content: str
    created_at: datetime = Field(..., validation_alias=AliasChoices("created_at", "createdAt"))
    created_by: str = Field(..., validation_alias=AliasChoices("created_by", "createdBy"))


class MilestoneBase(BaseModel):
    """Base milestone fields."""

    title: str = Field(..., min_length=1, max_length=200, description="Milestone title")
    description: Optional[str] = Field(None, max_length=2000, description="Milestone description")
    order: int = Field(default=1, ge=1, description="Display position within the client's checklist")
    due_date: Optional[datetime] = Field(None, description="Target due date")


class MilestoneCreate(MilestoneBase):
    """Schema for creating a milestone."""

    status: MilestoneStatus = MilestoneStatus.NOT_STARTED
    progress: int = Field(default=0, ge=0, le=100)


class MilestoneUpdateItem(BaseModel):
    """One row of an admin batch milestone edit."""

    id: UUID
    status: MilestoneStatus
    due_date: Optional[datetime] = None
    new_note: Optional[str] = Field(None, max_length=2000)


class MilestoneBatchUpdate(BaseModel):
    """Schema for updating a client's milestones in one transaction."""

    milestones: list[MilestoneUpdateItem]


class MilestonePatch(BaseModel):
    """Fully resolved field values to persist for one milestone."""

    id: UUID
    status: MilestoneStatus
    start_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    progress: int = Field(..., ge=0, le=100)
    notes: list[MilestoneNote] = Field(default_factory=list)


class Milestone(MilestoneBase):
    """Complete milestone model."""

    id: UUID
    client_id: UUID
    status: MilestoneStatus = Field(MilestoneStatus.NOT_STARTED)
    start_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    progress: int = Field(default=0, ge=0, le=100)
    notes: list[MilestoneNote] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


def _legacy_note_id(milestone_id: UUID | str, index: int) -> UUID:
    return uuid5(NAMESPACE_URL, f"milestone:{milestone_id}:note:{index}")


def normalize_notes(
    raw_notes: Optional[list[Any]],
    milestone_id: UUID | str,
    fallback_time: datetime,
) -> list[MilestoneNote]:
    """
    Convert stored note entries into structured notes.

    Older rows stored each note as a bare string, and some stored objects use
    camelCase keys (``createdAt``/``createdBy``) or lack them entirely. Missing
    ids are derived from the milestone id and the note position, a missing
    timestamp falls back to ``fallback_time`` and a missing author to
    ``legacy``, so repeated loads yield identical notes. Entries without any
    text are dropped.
    """
    notes: list[MilestoneNote] = []
    for index, entry in enumerate(raw_notes or []):
        if isinstance(entry, MilestoneNote):
            notes.append(entry)
            continue

        if isinstance(entry, str):
            entry = {"content": entry}
        elif not isinstance(entry, dict):
            continue

        content = entry.get("content")
        if not isinstance(content, str) or not content.strip():
            continue

        data = dict(entry)
        data["content"] = content.strip()
        if not data.get("id"):
            data["id"] = _legacy_note_id(milestone_id, index)
        if not data.get("created_at") and not data.get("createdAt"):
            data["created_at"] = fallback_time
        if not data.get("created_by") and not data.get("createdBy"):
            data["created_by"] = LEGACY_NOTE_AUTHOR
        notes.append(MilestoneNote.model_validate(data))
    return notes
