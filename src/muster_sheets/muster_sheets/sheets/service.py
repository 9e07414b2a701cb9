from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc, parse_iso, parse_optional_iso, to_iso_z
from ..common.validators import optional_text, require_non_empty
from ..core.enums import TimeFormat
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import MusterSheet, SheetStats
from .repository import SheetRepository
from .templates import ALWAYS_REQUIRED, FIELD_LABELS, get_template


def normalize_fields(fields: Optional[Sequence[str]]) -> tuple[str, ...]:
    """Known fields only, first/last name always present and first, no duplicates."""
    out: list[str] = list(ALWAYS_REQUIRED)
    for f in fields or ():
        if f not in FIELD_LABELS:
            raise ValidationError(f"Unknown field: {f}")
        if f not in out:
            out.append(f)
    return tuple(out)


def _parse_time_format(value) -> TimeFormat:
    if isinstance(value, TimeFormat):
        return value
    try:
        return TimeFormat(value or TimeFormat.STANDARD.value)
    except ValueError:
        raise ValidationError("Time format must be 'standard' or 'military'")


def _normalize_expiry(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        return to_iso_z(parse_iso(value))
    except ValueError:
        raise ValidationError("Expiry must be an ISO-8601 date-time")


class SheetService:
    """Use case: creators define muster sheets and share them."""

    def __init__(
        self,
        sheets: SheetRepository,
        attendance: Optional[AttendanceRepository] = None,
        *,
        public_base_url: str = "http://localhost:5000",
    ):
        self._sheets = sheets
        self._attendance = attendance
        self._public_base_url = public_base_url.rstrip("/")

    def create_sheet(
        self,
        *,
        creator_id: str,
        title: str,
        description: Optional[str] = None,
        required_fields: Optional[Sequence[str]] = None,
        time_format=None,
        expires_at: Optional[str] = None,
        template_id: Optional[str] = None,
    ) -> MusterSheet:
        creator_id = require_non_empty(creator_id, "Creator")
        title = require_non_empty(title, "Title")

        if template_id:
            template = get_template(template_id)
            if not template:
                raise ValidationError(f"Unknown template: {template_id}")
            if required_fields is None:
                required_fields = template.fields
            if time_format is None:
                time_format = template.time_format

        return self._sheets.create_sheet(
            creator_id=creator_id,
            title=title,
            description=optional_text(description),
            required_fields=normalize_fields(required_fields),
            time_format=_parse_time_format(time_format),
            expires_at=_normalize_expiry(expires_at),
        )

    def get_sheet(self, sheet_id: str) -> MusterSheet:
        sheet = self._sheets.get_by_id(sheet_id)
        if not sheet:
            raise NotFoundError("Muster sheet not found")
        return sheet

    def get_owned_sheet(self, sheet_id: str, requester_id: Optional[str]) -> MusterSheet:
        sheet = self.get_sheet(sheet_id)
        if not requester_id or sheet.creator_id != str(requester_id):
            raise AuthorizationError("Only the sheet's creator can do that")
        return sheet

    def list_for_creator(self, creator_id: str) -> Sequence[MusterSheet]:
        return self._sheets.list_for_creator(creator_id)

    def update_sheet(
        self,
        *,
        sheet_id: str,
        requester_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        required_fields: Optional[Sequence[str]] = None,
        time_format=None,
        expires_at: Optional[str] = None,
    ) -> MusterSheet:
        sheet = self.get_owned_sheet(sheet_id, requester_id)

        ok = self._sheets.update_sheet(
            sheet_id=sheet.sheet_id,
            title=require_non_empty(title, "Title") if title is not None else sheet.title,
            description=optional_text(description) if description is not None else sheet.description,
            required_fields=(
                normalize_fields(required_fields) if required_fields is not None else sheet.required_fields
            ),
            time_format=_parse_time_format(time_format) if time_format is not None else sheet.time_format,
            expires_at=_normalize_expiry(expires_at) if expires_at is not None else sheet.expires_at,
        )
        if not ok:
            raise ValidationError("Updating the sheet failed")
        return self.get_sheet(sheet.sheet_id)

    def set_active(self, *, sheet_id: str, requester_id: str, is_active: bool) -> MusterSheet:
        sheet = self.get_owned_sheet(sheet_id, requester_id)
        self._sheets.set_active(sheet.sheet_id, is_active=bool(is_active))
        return self.get_sheet(sheet.sheet_id)

    def clone_sheet(self, *, sheet_id: str, requester_id: Optional[str]) -> MusterSheet:
        """Copy a sheet's definition into a new, active sheet owned by the requester."""
        creator_id = require_non_empty(requester_id, "Creator")
        source = self.get_sheet(sheet_id)
        return self._sheets.create_sheet(
            creator_id=creator_id,
            title=f"Copy of {source.title}",
            description=source.description,
            required_fields=source.required_fields,
            time_format=source.time_format,
            expires_at=source.expires_at,
        )

    def is_accepting(self, sheet: MusterSheet, *, now: Optional[datetime] = None) -> bool:
        if not sheet.is_active:
            return False
        expires = parse_optional_iso(sheet.expires_at)
        if expires is None:
            return True
        return (now or now_utc()) < expires

    def share_url(self, sheet_id: str) -> str:
        return f"{self._public_base_url}/attend/{sheet_id}"

    def stats_for_creator(self, creator_id: str) -> SheetStats:
        sheets = self._sheets.list_for_creator(creator_id)
        total_entries = 0
        if self._attendance and sheets:
            total_entries = self._attendance.count_for_sheets([s.sheet_id for s in sheets])
        return SheetStats(
            total_sheets=len(sheets),
            active_sheets=sum(1 for s in sheets if s.is_active),
            total_entries=total_entries,
        )
