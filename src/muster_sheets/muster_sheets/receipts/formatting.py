from __future__ import annotations

import re

from ..core.constants import DISPLAY_GROUP_SIZE, HASH_LENGTH, SHORT_HASH_LENGTH

_WHITESPACE = re.compile(r"\s")
_HASH_FORMAT = re.compile(r"[a-fA-F0-9]{%d}" % HASH_LENGTH)


def clean_hash(value: str) -> str:
    """Drop every whitespace character (undoes display formatting)."""
    return _WHITESPACE.sub("", value or "")


def format_hash_for_display(hash_value: str) -> str:
    """`0a1b2c3d4e5f...` -> `0a1b2c3d 4e5f...`, a space every 8 characters."""
    if not hash_value:
        return hash_value
    return " ".join(
        hash_value[i:i + DISPLAY_GROUP_SIZE] for i in range(0, len(hash_value), DISPLAY_GROUP_SIZE)
    )


def get_short_hash(hash_value: str) -> str:
    return hash_value[:SHORT_HASH_LENGTH]


def is_valid_hash_format(value: str) -> bool:
    """Syntactic check only: 64 hex characters once whitespace is removed."""
    if not isinstance(value, str):
        return False
    return _HASH_FORMAT.fullmatch(clean_hash(value)) is not None
