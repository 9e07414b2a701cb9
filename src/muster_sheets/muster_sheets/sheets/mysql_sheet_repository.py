from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import TimeFormat
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import MusterSheet
from .repository import SheetRepository

_COLUMNS = "id, creator_id, title, description, is_active, expires_at, time_format, required_fields, created_at"


def _to_sheet(r: dict) -> MusterSheet:
    return MusterSheet(
        sheet_id=str(r["id"]),
        creator_id=str(r["creator_id"]),
        title=r["title"],
        description=r.get("description"),
        is_active=bool(r.get("is_active", True)),
        expires_at=r.get("expires_at"),
        time_format=TimeFormat(r.get("time_format") or TimeFormat.STANDARD.value),
        required_fields=tuple(load_json_list(r.get("required_fields"))),
        created_at=r.get("created_at"),
    )


class MySQLSheetRepository(SheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_sheet(
        self,
        *,
        creator_id: str,
        title: str,
        description: Optional[str],
        required_fields: Sequence[str],
        time_format: TimeFormat,
        expires_at: Optional[str],
    ) -> MusterSheet:
        sheet_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO muster_sheets(id, creator_id, title, description, is_active, expires_at, time_format, required_fields)
                VALUES(%s,%s,%s,%s,1,%s,%s,%s)
                """,
                (
                    sheet_id,
                    creator_id,
                    title,
                    description,
                    expires_at,
                    time_format.value,
                    dump_json_list(required_fields),
                ),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM muster_sheets WHERE id=%s", (sheet_id,))
            return _to_sheet(fetchone(cur))

    def get_by_id(self, sheet_id: str) -> Optional[MusterSheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM muster_sheets WHERE id=%s", (sheet_id,))
            r = fetchone(cur)
            return _to_sheet(r) if r else None

    def list_for_creator(self, creator_id: str) -> Sequence[MusterSheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM muster_sheets
                WHERE creator_id=%s
                ORDER BY created_at DESC
                """,
                (creator_id,),
            )
            return [_to_sheet(r) for r in fetchall(cur)]

    def update_sheet(
        self,
        *,
        sheet_id: str,
        title: str,
        description: Optional[str],
        required_fields: Sequence[str],
        time_format: TimeFormat,
        expires_at: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE muster_sheets
                SET title=%s, description=%s, required_fields=%s, time_format=%s, expires_at=%s
                WHERE id=%s
                """,
                (title, description, dump_json_list(required_fields), time_format.value, expires_at, sheet_id),
            )
            return cur.rowcount > 0

    def set_active(self, sheet_id: str, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE muster_sheets SET is_active=%s WHERE id=%s", (1 if is_active else 0, sheet_id))
            return cur.rowcount > 0
