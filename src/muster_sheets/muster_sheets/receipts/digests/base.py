from __future__ import annotations

from abc import ABC, abstractmethod


class ReceiptDigest(ABC):
    """Strategy Pattern: how the canonical entry text becomes a 64-char receipt."""

    name: str = "digest"
    is_secure: bool = False

    @abstractmethod
    def hexdigest(self, canonical: str) -> str:
        raise NotImplementedError
