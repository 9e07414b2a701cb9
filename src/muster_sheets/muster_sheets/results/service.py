from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass

from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_checkin
from ..core.constants import DEFAULT_RESULTS_LIMIT
from ..receipts.formatting import get_short_hash
from ..sheets.model import MusterSheet
from ..sheets.service import SheetService
from ..sheets.templates import ALWAYS_REQUIRED, FIELD_LABELS

NAME_COLUMN = "Name"
CHECKIN_COLUMN = "Check-in Time"


@dataclass(frozen=True)
class ResultsData:
    sheet: MusterSheet
    columns: list[str]
    rows: list[dict]

    def to_dict(self) -> dict:
        return {
            "sheet": self.sheet.to_dict(),
            "columns": self.columns,
            "rows": self.rows,
            "total": len(self.rows),
        }


def _extra_fields(sheet: MusterSheet) -> list[str]:
    return [f for f in sheet.required_fields if f not in ALWAYS_REQUIRED and f in FIELD_LABELS]


def _cell(entry: AttendanceEntry, field_id: str) -> str:
    value = getattr(entry, field_id, None)
    return "" if value is None else str(value)


class ResultsService:
    """Creator-facing view of who signed in to a sheet."""

    def __init__(self, attendance: AttendanceRepository, sheet_service: SheetService):
        self._attendance = attendance
        self._sheet_service = sheet_service

    def build_results(self, sheet_id: str, requester_id: str) -> ResultsData:
        sheet = self._sheet_service.get_owned_sheet(sheet_id, requester_id)
        entries = self._attendance.list_for_sheet(sheet.sheet_id, limit=DEFAULT_RESULTS_LIMIT)
        extra = _extra_fields(sheet)

        rows: list[dict] = []
        for e in entries:
            row = {
                "id": e.entry_id,
                NAME_COLUMN: f"{e.first_name} {e.last_name}",
            }
            for f in extra:
                row[FIELD_LABELS[f]] = _cell(e, f)
            row[CHECKIN_COLUMN] = format_checkin(e.timestamp, sheet.time_format)
            row["receipt"] = get_short_hash(e.attendance_hash) if e.attendance_hash else ""
            rows.append(row)

        columns = [NAME_COLUMN, *(FIELD_LABELS[f] for f in extra), CHECKIN_COLUMN]
        return ResultsData(sheet=sheet, columns=columns, rows=rows)

    def export_csv(self, sheet_id: str, requester_id: str) -> tuple[str, bytes]:
        data = self.build_results(sheet_id, requester_id)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=data.columns, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        slug = re.sub(r"[^A-Za-z0-9]+", "_", data.sheet.title).strip("_").lower() or "muster_sheet"
        return f"{slug}_attendance.csv", out.getvalue().encode("utf-8-sig")
