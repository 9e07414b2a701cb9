from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceEntry, NewEntry
from .repository import AttendanceRepository

_COLUMNS = """
    id, sheet_id, first_name, last_name, email, phone, `rank`, badge_number, unit, age,
    timestamp, created_at, attendance_hash
"""


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_entry(self, entry: NewEntry) -> AttendanceEntry:
        entry_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    id, sheet_id, first_name, last_name, email, phone, `rank`, badge_number, unit, age, timestamp
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry_id,
                    entry.sheet_id,
                    entry.first_name,
                    entry.last_name,
                    entry.email,
                    entry.phone,
                    entry.rank,
                    entry.badge_number,
                    entry.unit,
                    entry.age,
                    entry.timestamp,
                ),
            )
            # created_at comes from the column default, read it back.
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (entry_id,))
            return AttendanceEntry.from_row(fetchone(cur))

    def attach_hash(self, *, entry_id: str, attendance_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET attendance_hash=%s
                WHERE id=%s AND attendance_hash IS NULL
                """,
                (attendance_hash, entry_id),
            )
            return cur.rowcount > 0

    def get_by_id(self, entry_id: str) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (entry_id,))
            r = fetchone(cur)
            return AttendanceEntry.from_row(r) if r else None

    def get_by_hash(self, attendance_hash: str) -> Optional[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_hash=%s LIMIT 1",
                (attendance_hash,),
            )
            r = fetchone(cur)
            return AttendanceEntry.from_row(r) if r else None

    def list_for_sheet(self, sheet_id: str, *, limit: int = 1000) -> Sequence[AttendanceEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE sheet_id=%s
                ORDER BY timestamp ASC
                LIMIT %s
                """,
                (sheet_id, int(limit)),
            )
            return [AttendanceEntry.from_row(r) for r in fetchall(cur)]

    def count_for_sheets(self, sheet_ids: Sequence[str]) -> int:
        if not sheet_ids:
            return 0
        placeholders = ",".join(["%s"] * len(sheet_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COUNT(*) AS total FROM attendance_records WHERE sheet_id IN ({placeholders})",
                tuple(sheet_ids),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
