"""Field catalogue and preset sheet templates."""
from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import TimeFormat


@dataclass(frozen=True)
class FieldOption:
    field_id: str
    label: str
    required: bool = False


@dataclass(frozen=True)
class SheetTemplate:
    template_id: str
    name: str
    description: str
    fields: tuple[str, ...]
    time_format: TimeFormat = TimeFormat.STANDARD

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "name": self.name,
            "description": self.description,
            "fields": list(self.fields),
            "timeFormat": self.time_format.value,
        }


FIELD_OPTIONS: tuple[FieldOption, ...] = (
    FieldOption("first_name", "First Name", required=True),
    FieldOption("last_name", "Last Name", required=True),
    FieldOption("email", "Email Address"),
    FieldOption("phone", "Phone Number"),
    FieldOption("rank", "Rank/Position"),
    FieldOption("unit", "Unit/Department"),
    FieldOption("badge_number", "Badge/ID Number"),
    FieldOption("age", "Age"),
)

FIELD_LABELS = {f.field_id: f.label for f in FIELD_OPTIONS}
ALWAYS_REQUIRED = tuple(f.field_id for f in FIELD_OPTIONS if f.required)

PRESET_TEMPLATES: tuple[SheetTemplate, ...] = (
    SheetTemplate(
        "class",
        "Class Attendance",
        "Track attendance for college or certification classes",
        ("first_name", "last_name", "email", "phone"),
    ),
    SheetTemplate(
        "team_meeting",
        "Team Meeting",
        "For internal team meetings and project stand-ups",
        ("first_name", "last_name", "email", "unit"),
    ),
    SheetTemplate(
        "general_event",
        "General Event Check-in",
        "Any type of gathering or event check-in",
        ("first_name", "last_name", "email"),
    ),
    SheetTemplate(
        "custom",
        "Custom Template",
        "Create your own custom attendance sheet",
        ("first_name", "last_name"),
    ),
)


def get_template(template_id: str) -> SheetTemplate | None:
    for t in PRESET_TEMPLATES:
        if t.template_id == template_id:
            return t
    return None
