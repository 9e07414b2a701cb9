from __future__ import annotations

from ...core.constants import HASH_LENGTH
from .base import ReceiptDigest

_MASK = 0xFFFFFFFF


class WeakDigest(ReceiptDigest):
    """32-bit rolling hash for runtimes without SHA-256.

    h = h * 31 + unit over UTF-16 code units with signed 32-bit wraparound,
    then |h| in hex, right-padded with '0' to 64 characters. Deterministic,
    but anyone can forge a collision: it is not an integrity guarantee.
    """

    name = "rolling32"
    is_secure = False

    def hexdigest(self, canonical: str) -> str:
        data = canonical.encode("utf-16-le", "surrogatepass")
        h = 0
        for i in range(0, len(data), 2):
            unit = data[i] | (data[i + 1] << 8)
            h = (h * 31 + unit) & _MASK
        if h & 0x80000000:
            h -= 1 << 32
        return format(abs(h), "x").ljust(HASH_LENGTH, "0")[:HASH_LENGTH]
