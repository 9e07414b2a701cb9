from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value) -> Optional[str]:
    """Blank form values are stored as NULL."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_age(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        age = int(str(value).strip())
    except ValueError:
        raise ValidationError("Age must be a whole number")
    if age < 0:
        raise ValidationError("Age must not be negative")
    return age
