from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import TimeFormat


@dataclass(frozen=True)
class MusterSheet:
    """Domain entity: an event roster attendees sign in to."""

    sheet_id: str
    creator_id: str
    title: str
    description: Optional[str]
    is_active: bool
    expires_at: Optional[str]
    time_format: TimeFormat
    required_fields: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.sheet_id,
            "creatorId": self.creator_id,
            "title": self.title,
            "description": self.description,
            "isActive": self.is_active,
            "expiresAt": self.expires_at,
            "timeFormat": self.time_format.value,
            "requiredFields": list(self.required_fields),
            "createdAt": self.created_at,
        }

    def public_dict(self) -> dict:
        """What an anonymous attendee may see."""
        data = self.to_dict()
        data.pop("creatorId")
        return data


@dataclass(frozen=True)
class SheetStats:
    total_sheets: int
    active_sheets: int
    total_entries: int

    def to_dict(self) -> dict:
        return {
            "totalSheets": self.total_sheets,
            "activeSheets": self.active_sheets,
            "totalEntries": self.total_entries,
        }
