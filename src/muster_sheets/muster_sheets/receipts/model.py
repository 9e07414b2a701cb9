from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import AttendanceEntry
from ..core.enums import VerificationStatus
from ..core.exceptions import IncompleteEntryError
from ..sheets.model import MusterSheet
from .formatting import format_hash_for_display

_REQUIRED = (
    ("id", "entry_id"),
    ("sheetId", "sheet_id"),
    ("firstName", "first_name"),
    ("lastName", "last_name"),
    ("timestamp", "timestamp"),
    ("createdAt", "created_at"),
)


@dataclass(frozen=True)
class HashableEntry:
    """An entry that has everything a receipt is derived from.

    Only `from_entry` builds one, so holding a HashableEntry means the store
    has already assigned `id` and `createdAt` (first phase of the write is done).
    """

    entry_id: str
    sheet_id: str
    first_name: str
    last_name: str
    timestamp: str
    created_at: str
    email: Optional[str] = None
    phone: Optional[str] = None
    rank: Optional[str] = None
    badge_number: Optional[str] = None
    unit: Optional[str] = None
    age: Optional[int] = None

    @classmethod
    def from_entry(cls, entry: AttendanceEntry) -> "HashableEntry":
        missing = [wire for wire, attr in _REQUIRED if not getattr(entry, attr)]
        if missing:
            raise IncompleteEntryError(f"Missing required fields: {', '.join(missing)}")

        return cls(
            entry_id=entry.entry_id,
            sheet_id=entry.sheet_id,
            first_name=entry.first_name,
            last_name=entry.last_name,
            timestamp=entry.timestamp,
            created_at=entry.created_at,
            email=entry.email,
            phone=entry.phone,
            rank=entry.rank,
            badge_number=entry.badge_number,
            unit=entry.unit,
            age=entry.age,
        )


_MESSAGES = {
    VerificationStatus.VALID: "Valid receipt",
    VerificationStatus.NOT_FOUND: "Receipt not found in our records",
    VerificationStatus.TAMPERED: "Receipt verification failed: the stored record no longer matches its receipt",
}


@dataclass(frozen=True)
class VerificationResult:
    status: VerificationStatus
    receipt: str
    entry: Optional[AttendanceEntry] = None
    sheet: Optional[MusterSheet] = field(default=None)

    @property
    def is_valid(self) -> bool:
        return self.status == VerificationStatus.VALID

    @property
    def message(self) -> str:
        return _MESSAGES[self.status]

    def to_dict(self) -> dict:
        data = {
            "status": self.status.value,
            "isValid": self.is_valid,
            "message": self.message,
            "receipt": format_hash_for_display(self.receipt),
        }
        if self.is_valid and self.entry is not None:
            data["record"] = self.entry.to_dict()
            if self.sheet is not None:
                data["sheet"] = {"id": self.sheet.sheet_id, "title": self.sheet.title}
        return data
