from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_utc, to_iso_z
from ..common.validators import optional_text, parse_age
from ..core.exceptions import NotFoundError, SheetClosedError, ValidationError
from ..receipts.formatting import format_hash_for_display, get_short_hash
from ..receipts.service import ReceiptService
from ..sheets.repository import SheetRepository
from ..sheets.service import SheetService
from ..sheets.templates import ALWAYS_REQUIRED, FIELD_LABELS
from .model import AttendanceEntry, NewEntry
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("email", "phone", "rank", "badge_number", "unit")


@dataclass(frozen=True)
class SubmissionResult:
    entry: AttendanceEntry
    receipt: Optional[str]

    @property
    def display_receipt(self) -> Optional[str]:
        return format_hash_for_display(self.receipt) if self.receipt else None

    @property
    def short_receipt(self) -> Optional[str]:
        return get_short_hash(self.receipt) if self.receipt else None

    def to_dict(self) -> dict:
        return {
            "entry": self.entry.to_dict(),
            "receipt": self.receipt,
            "displayReceipt": self.display_receipt,
            "shortReceipt": self.short_receipt,
        }


class AttendanceService:
    """Use case: an attendee signs in to a muster sheet and gets a receipt."""

    def __init__(
        self,
        entries: AttendanceRepository,
        sheets: SheetRepository,
        receipts: ReceiptService,
        sheet_service: Optional[SheetService] = None,
    ):
        self._entries = entries
        self._sheets = sheets
        self._receipts = receipts
        self._sheet_service = sheet_service or SheetService(sheets, entries)

    def submit(
        self,
        sheet_id: str,
        form: Mapping[str, Any],
        *,
        now: Optional[datetime] = None,
    ) -> SubmissionResult:
        sheet = self._sheets.get_by_id(sheet_id)
        if not sheet:
            raise NotFoundError("Muster sheet not found")

        now = now or now_utc()
        if not self._sheet_service.is_accepting(sheet, now=now):
            raise SheetClosedError("This muster sheet is no longer accepting submissions")

        values = {k: optional_text(form.get(k)) for k in FIELD_LABELS}
        required = dict.fromkeys((*ALWAYS_REQUIRED, *sheet.required_fields))
        missing = [FIELD_LABELS.get(f, f) for f in required if not values.get(f)]
        if missing:
            raise ValidationError(f"Please fill in: {', '.join(missing)}")

        new_entry = NewEntry(
            sheet_id=sheet.sheet_id,
            first_name=values["first_name"],
            last_name=values["last_name"],
            timestamp=to_iso_z(now),
            age=parse_age(values["age"]),
            **{f: values[f] for f in _TEXT_FIELDS},
        )

        entry = self._entries.insert_entry(new_entry)
        logger.info("attendance recorded on sheet %s (entry %s)", sheet.sheet_id, entry.entry_id)

        receipt = self._receipts.attach_receipt(entry)
        if receipt:
            entry = entry.with_hash(receipt)
        return SubmissionResult(entry=entry, receipt=receipt)
