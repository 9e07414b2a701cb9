from __future__ import annotations

from enum import Enum


class TimeFormat(str, Enum):
    """How check-in times are rendered for a sheet."""

    STANDARD = "standard"
    MILITARY = "military"


class VerificationStatus(str, Enum):
    """Outcome of looking up and re-deriving an attendance receipt."""

    VALID = "valid"
    NOT_FOUND = "not_found"
    TAMPERED = "tampered"
