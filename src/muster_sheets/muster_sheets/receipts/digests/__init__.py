from .base import ReceiptDigest
from .secure_digest import SecureDigest
from .weak_digest import WeakDigest

__all__ = [
    "ReceiptDigest",
    "SecureDigest",
    "WeakDigest",
]
