from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceEntry, NewEntry


class AttendanceRepository(Protocol):
    """Store for sign-in entries.

    The store assigns `id` and `created_at` on insert; services never invent them.
    """

    def insert_entry(self, entry: NewEntry) -> AttendanceEntry:
        raise NotImplementedError

    def attach_hash(self, *, entry_id: str, attendance_hash: str) -> bool:
        """Set the receipt on an entry that does not have one yet."""

        raise NotImplementedError

    def get_by_id(self, entry_id: str) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def get_by_hash(self, attendance_hash: str) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def list_for_sheet(self, sheet_id: str, *, limit: int = 1000) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def count_for_sheets(self, sheet_ids: Sequence[str]) -> int:
        raise NotImplementedError
