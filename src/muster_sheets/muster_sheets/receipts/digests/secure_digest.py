from __future__ import annotations

import hashlib

from .base import ReceiptDigest


class SecureDigest(ReceiptDigest):
    """SHA-256 over the UTF-8 canonical text."""

    name = "sha256"
    is_secure = True

    def hexdigest(self, canonical: str) -> str:
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
