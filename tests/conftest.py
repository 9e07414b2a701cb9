from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pytest

from src.muster_sheets.muster_sheets.attendance.model import AttendanceEntry, NewEntry
from src.muster_sheets.muster_sheets.container import wire_services
from src.muster_sheets.muster_sheets.core.enums import TimeFormat
from src.muster_sheets.muster_sheets.receipts.digests import SecureDigest
from src.muster_sheets.muster_sheets.sheets.model import MusterSheet


class InMemorySheets:
    def __init__(self):
        self._next_id = 1
        self.sheets: dict[str, MusterSheet] = {}

    def add(self, sheet: MusterSheet) -> MusterSheet:
        self.sheets[sheet.sheet_id] = sheet
        return sheet

    def create_sheet(self, *, creator_id, title, description, required_fields, time_format, expires_at):
        sheet_id = f"sheet-{self._next_id}"
        self._next_id += 1
        return self.add(
            MusterSheet(
                sheet_id=sheet_id,
                creator_id=creator_id,
                title=title,
                description=description,
                is_active=True,
                expires_at=expires_at,
                time_format=time_format,
                required_fields=tuple(required_fields),
                created_at="2024-01-01T09:00:00.000Z",
            )
        )

    def get_by_id(self, sheet_id) -> Optional[MusterSheet]:
        return self.sheets.get(sheet_id)

    def list_for_creator(self, creator_id):
        return [s for s in self.sheets.values() if s.creator_id == creator_id]

    def update_sheet(self, *, sheet_id, title, description, required_fields, time_format, expires_at):
        sheet = self.sheets.get(sheet_id)
        if not sheet:
            return False
        self.sheets[sheet_id] = MusterSheet(
            sheet_id=sheet.sheet_id,
            creator_id=sheet.creator_id,
            title=title,
            description=description,
            is_active=sheet.is_active,
            expires_at=expires_at,
            time_format=time_format,
            required_fields=tuple(required_fields),
            created_at=sheet.created_at,
        )
        return True

    def set_active(self, sheet_id, *, is_active):
        sheet = self.sheets.get(sheet_id)
        if not sheet:
            return False
        self.sheets[sheet_id] = MusterSheet(
            sheet_id=sheet.sheet_id,
            creator_id=sheet.creator_id,
            title=sheet.title,
            description=sheet.description,
            is_active=is_active,
            expires_at=sheet.expires_at,
            time_format=sheet.time_format,
            required_fields=sheet.required_fields,
            created_at=sheet.created_at,
        )
        return True


class InMemoryEntries:
    """Assigns ids and created_at the way the database does."""

    def __init__(self, created_at: str = "2024-01-01T10:00:01.000Z"):
        self._next_id = 1
        self._created_at = created_at
        self.entries: dict[str, AttendanceEntry] = {}
        self.fail_attach = False

    def add(self, entry: AttendanceEntry) -> AttendanceEntry:
        self.entries[entry.entry_id] = entry
        return entry

    def insert_entry(self, entry: NewEntry) -> AttendanceEntry:
        entry_id = f"entry-{self._next_id}"
        self._next_id += 1
        return self.add(
            AttendanceEntry(
                entry_id=entry_id,
                sheet_id=entry.sheet_id,
                first_name=entry.first_name,
                last_name=entry.last_name,
                timestamp=entry.timestamp,
                created_at=self._created_at,
                email=entry.email,
                phone=entry.phone,
                rank=entry.rank,
                badge_number=entry.badge_number,
                unit=entry.unit,
                age=entry.age,
            )
        )

    def attach_hash(self, *, entry_id, attendance_hash):
        if self.fail_attach:
            raise ConnectionError("database went away")
        entry = self.entries.get(entry_id)
        if not entry or entry.attendance_hash:
            return False
        self.entries[entry_id] = entry.with_hash(attendance_hash)
        return True

    def get_by_id(self, entry_id):
        return self.entries.get(entry_id)

    def get_by_hash(self, attendance_hash):
        for e in self.entries.values():
            if e.attendance_hash == attendance_hash:
                return e
        return None

    def list_for_sheet(self, sheet_id, *, limit=1000):
        rows = [e for e in self.entries.values() if e.sheet_id == sheet_id]
        return sorted(rows, key=lambda e: e.timestamp)[:limit]

    def count_for_sheets(self, sheet_ids):
        return sum(1 for e in self.entries.values() if e.sheet_id in set(sheet_ids))


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_entry():
    return AttendanceEntry(
        entry_id="e1",
        sheet_id="s1",
        first_name="Ann",
        last_name="Lee",
        timestamp="2024-01-01T10:00:00Z",
        created_at="2024-01-01T10:00:01Z",
    )


@pytest.fixture
def sheets_repo():
    return InMemorySheets()


@pytest.fixture
def entries_repo():
    return InMemoryEntries()


@pytest.fixture
def open_sheet(sheets_repo):
    return sheets_repo.add(
        MusterSheet(
            sheet_id="s1",
            creator_id="creator-1",
            title="Morning Muster",
            description=None,
            is_active=True,
            expires_at=None,
            time_format=TimeFormat.STANDARD,
            required_fields=("first_name", "last_name", "email", "rank"),
        )
    )


@pytest.fixture
def container(sheets_repo, entries_repo):
    return wire_services(
        sheets_repo=sheets_repo,
        attendance_repo=entries_repo,
        public_base_url="http://testserver",
        digest=SecureDigest(),
    )
