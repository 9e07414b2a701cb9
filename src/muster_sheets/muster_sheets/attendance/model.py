from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one sign-in on a muster sheet.

    `entry_id` and `created_at` are assigned by the store at insert time;
    `attendance_hash` is attached afterwards and never changes again.
    """

    entry_id: Optional[str]
    sheet_id: str
    first_name: str
    last_name: str
    timestamp: str
    created_at: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    rank: Optional[str] = None
    badge_number: Optional[str] = None
    unit: Optional[str] = None
    age: Optional[int] = None
    attendance_hash: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceEntry":
        """Build from a snake_case store row."""
        return cls(
            entry_id=_opt_str(row.get("id")),
            sheet_id=str(row["sheet_id"]),
            first_name=row["first_name"],
            last_name=row["last_name"],
            timestamp=str(row["timestamp"]),
            created_at=_opt_str(row.get("created_at")),
            email=row.get("email"),
            phone=row.get("phone"),
            rank=row.get("rank"),
            badge_number=row.get("badge_number"),
            unit=row.get("unit"),
            age=_opt_int(row.get("age")),
            attendance_hash=row.get("attendance_hash"),
        )

    def with_hash(self, attendance_hash: str) -> "AttendanceEntry":
        return AttendanceEntry(
            entry_id=self.entry_id,
            sheet_id=self.sheet_id,
            first_name=self.first_name,
            last_name=self.last_name,
            timestamp=self.timestamp,
            created_at=self.created_at,
            email=self.email,
            phone=self.phone,
            rank=self.rank,
            badge_number=self.badge_number,
            unit=self.unit,
            age=self.age,
            attendance_hash=attendance_hash,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "sheetId": self.sheet_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "timestamp": self.timestamp,
            "createdAt": self.created_at,
            "email": self.email,
            "phone": self.phone,
            "rank": self.rank,
            "badgeNumber": self.badge_number,
            "unit": self.unit,
            "age": self.age,
            "attendanceHash": self.attendance_hash,
        }


@dataclass(frozen=True)
class NewEntry:
    """Sign-in data collected from the attendee before the store assigns id/created_at."""

    sheet_id: str
    first_name: str
    last_name: str
    timestamp: str
    email: Optional[str] = None
    phone: Optional[str] = None
    rank: Optional[str] = None
    badge_number: Optional[str] = None
    unit: Optional[str] = None
    age: Optional[int] = None


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _opt_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
