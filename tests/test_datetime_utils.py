from datetime import datetime, timedelta, timezone

from src.muster_sheets.muster_sheets.common.datetime_utils import format_checkin, parse_iso, to_iso_z
from src.muster_sheets.muster_sheets.core.enums import TimeFormat


def test_to_iso_z_matches_browser_rendering():
    dt = datetime(2024, 3, 5, 7, 8, 9, 123456, tzinfo=timezone.utc)

    assert to_iso_z(dt) == "2024-03-05T07:08:09.123Z"


def test_to_iso_z_converts_offsets_to_utc():
    dt = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

    assert to_iso_z(dt) == "2024-01-01T10:00:00.000Z"


def test_parse_iso_accepts_z_suffix():
    assert parse_iso("2024-01-01T10:00:00.000Z") == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_format_checkin_standard_and_military():
    assert format_checkin("2024-01-01T00:15:00Z", TimeFormat.STANDARD) == "Jan 1, 2024 12:15 AM"
    assert format_checkin("2024-01-01T12:00:00Z", TimeFormat.STANDARD) == "Jan 1, 2024 12:00 PM"
    assert format_checkin("2024-01-01T00:15:00Z", TimeFormat.MILITARY) == "Jan 1, 2024 00:15"
