from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Callable

from .digests.base import ReceiptDigest
from .digests.secure_digest import SecureDigest
from .digests.weak_digest import WeakDigest

logger = logging.getLogger(__name__)


def sha256_available() -> bool:
    try:
        hashlib.new("sha256").update(b"probe")
    except (ValueError, AttributeError):
        return False
    return True


@dataclass
class DigestFactory:
    """Factory Pattern: pick the receipt digest once, at startup, by capability detection."""

    probe: Callable[[], bool] = field(default=sha256_available)

    def detect(self) -> ReceiptDigest:
        if self.probe():
            return SecureDigest()

        logger.warning(
            "SHA-256 is unavailable in this runtime; attendance receipts fall back to the "
            "non-cryptographic %s digest and can be forged",
            WeakDigest.name,
        )
        return WeakDigest()
