from __future__ import annotations

import hmac
import logging
from typing import Optional

from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository
from ..core.enums import VerificationStatus
from ..core.exceptions import IncompleteEntryError, MalformedReceiptError
from ..sheets.repository import SheetRepository
from .canonical import canonical_string
from .digests.base import ReceiptDigest
from .factory import DigestFactory
from .formatting import clean_hash, is_valid_hash_format
from .model import HashableEntry, VerificationResult

logger = logging.getLogger(__name__)


class ReceiptService:
    """Issues attendance receipts and checks them against the stored records.

    A receipt is the digest of an entry's canonical text. It is issued once,
    right after the store has assigned the entry's id and created_at, and is
    never recomputed for storage afterwards.
    """

    def __init__(
        self,
        entries: AttendanceRepository,
        sheets: Optional[SheetRepository] = None,
        digest: Optional[ReceiptDigest] = None,
    ):
        self._entries = entries
        self._sheets = sheets
        self._digest = digest or DigestFactory().detect()

    @property
    def digest(self) -> ReceiptDigest:
        return self._digest

    def generate_hash(self, entry: AttendanceEntry) -> str:
        hashable = HashableEntry.from_entry(entry)
        return self._digest.hexdigest(canonical_string(hashable))

    def verify_hash(self, candidate, entry: AttendanceEntry) -> bool:
        if not isinstance(candidate, str):
            return False
        try:
            expected = self.generate_hash(entry)
        except IncompleteEntryError:
            return False
        return hmac.compare_digest(candidate.encode("utf-8", "surrogatepass"), expected.encode("utf-8"))

    def attach_receipt(self, entry: AttendanceEntry) -> Optional[str]:
        """Second write phase: derive the receipt and store it on the entry.

        Returns the receipt, or None when it could not be attached. The entry
        itself is already saved, so the caller's submission still stands.
        """
        try:
            receipt = self.generate_hash(entry)
            attached = self._entries.attach_hash(entry_id=entry.entry_id, attendance_hash=receipt)
        except Exception:
            logger.exception("receipt attach failed for entry %s", entry.entry_id)
            return None

        if not attached:
            logger.error("receipt attach failed for entry %s: entry missing or already has a receipt", entry.entry_id)
            return None
        return receipt

    def verify_receipt(self, raw) -> VerificationResult:
        receipt = clean_hash(raw) if isinstance(raw, str) else ""
        if not receipt or not is_valid_hash_format(receipt):
            raise MalformedReceiptError("Invalid receipt format")

        entry = self._entries.get_by_hash(receipt)
        if entry is None:
            return VerificationResult(status=VerificationStatus.NOT_FOUND, receipt=receipt)

        if not self.verify_hash(receipt, entry):
            logger.warning("receipt %s does not match stored entry %s", receipt[:16], entry.entry_id)
            return VerificationResult(status=VerificationStatus.TAMPERED, receipt=receipt, entry=entry)

        sheet = self._sheets.get_by_id(entry.sheet_id) if self._sheets else None
        return VerificationResult(status=VerificationStatus.VALID, receipt=receipt, entry=entry, sheet=sheet)
