from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from src.muster_sheets.muster_sheets.core.exceptions import NotFoundError, SheetClosedError, ValidationError
from src.muster_sheets.muster_sheets.receipts.formatting import format_hash_for_display


FORM = {
    "first_name": " Ann ",
    "last_name": "Lee",
    "email": "ann@example.com",
    "rank": "Sgt",
    "age": "31",
}


def test_submit_records_entry_and_issues_receipt(container, open_sheet, fixed_now):
    result = container.attendance_service.submit("s1", FORM, now=fixed_now)

    stored = container.attendance_repo.get_by_id(result.entry.entry_id)
    assert stored.first_name == "Ann"
    assert stored.timestamp == "2024-01-01T10:00:00.000Z"
    assert stored.created_at == "2024-01-01T10:00:01.000Z"
    assert stored.age == 31
    assert stored.attendance_hash == result.receipt
    assert result.entry.attendance_hash == result.receipt
    assert result.display_receipt == format_hash_for_display(result.receipt)
    assert result.short_receipt == result.receipt[:16]


def test_submitted_receipt_verifies(container, open_sheet, fixed_now):
    result = container.attendance_service.submit("s1", FORM, now=fixed_now)

    assert container.receipt_service.verify_receipt(result.receipt).is_valid


def test_blank_optional_fields_are_stored_as_none(container, open_sheet, fixed_now):
    form = {**FORM, "phone": "  ", "unit": ""}

    entry = container.attendance_service.submit("s1", form, now=fixed_now).entry

    assert entry.phone is None
    assert entry.unit is None


def test_submit_requires_sheet_required_fields(container, open_sheet, fixed_now):
    form = {k: v for k, v in FORM.items() if k != "rank"}

    with pytest.raises(ValidationError, match="Rank/Position"):
        container.attendance_service.submit("s1", form, now=fixed_now)

    assert container.attendance_repo.entries == {}


def test_submit_always_requires_names(container, sheets_repo, open_sheet, fixed_now):
    sheets_repo.add(replace(open_sheet, required_fields=()))

    with pytest.raises(ValidationError, match="First Name, Last Name"):
        container.attendance_service.submit("s1", {"email": "x@example.com"}, now=fixed_now)


def test_submit_rejects_bad_age(container, open_sheet, fixed_now):
    with pytest.raises(ValidationError, match="Age"):
        container.attendance_service.submit("s1", {**FORM, "age": "thirty"}, now=fixed_now)


def test_submit_to_unknown_sheet(container, fixed_now):
    with pytest.raises(NotFoundError):
        container.attendance_service.submit("missing", FORM, now=fixed_now)


def test_submit_to_inactive_sheet(container, sheets_repo, open_sheet, fixed_now):
    sheets_repo.add(replace(open_sheet, is_active=False))

    with pytest.raises(SheetClosedError):
        container.attendance_service.submit("s1", FORM, now=fixed_now)


def test_submit_to_expired_sheet(container, sheets_repo, open_sheet, fixed_now):
    sheets_repo.add(replace(open_sheet, expires_at="2024-01-01T09:59:59.000Z"))

    with pytest.raises(SheetClosedError):
        container.attendance_service.submit("s1", FORM, now=fixed_now)


def test_submission_survives_receipt_attach_failure(container, open_sheet, fixed_now, caplog):
    container.attendance_repo.fail_attach = True

    with caplog.at_level(logging.ERROR):
        result = container.attendance_service.submit("s1", FORM, now=fixed_now)

    assert result.receipt is None
    assert result.display_receipt is None
    assert container.attendance_repo.get_by_id(result.entry.entry_id) is not None
    assert "receipt attach failed" in caplog.text
