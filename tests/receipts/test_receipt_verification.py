from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from src.muster_sheets.muster_sheets.core.enums import VerificationStatus
from src.muster_sheets.muster_sheets.core.exceptions import MalformedReceiptError
from src.muster_sheets.muster_sheets.receipts.formatting import format_hash_for_display


def _stored_entry(container, sample_entry):
    """Store an entry and attach its receipt the way a submission does."""
    repo = container.attendance_repo
    repo.add(sample_entry)
    receipt = container.receipt_service.attach_receipt(sample_entry)
    return receipt, repo.get_by_id(sample_entry.entry_id)


def test_attach_receipt_stores_hash_on_entry(container, sample_entry):
    receipt, stored = _stored_entry(container, sample_entry)

    assert receipt == container.receipt_service.generate_hash(sample_entry)
    assert stored.attendance_hash == receipt


def test_attach_receipt_never_overwrites_existing_hash(container, sample_entry, caplog):
    receipt, stored = _stored_entry(container, sample_entry)

    with caplog.at_level(logging.ERROR):
        again = container.receipt_service.attach_receipt(stored)

    assert again is None
    assert container.attendance_repo.get_by_id("e1").attendance_hash == receipt
    assert "receipt attach failed" in caplog.text


def test_attach_receipt_failure_is_logged_not_raised(container, sample_entry, caplog):
    container.attendance_repo.add(sample_entry)
    container.attendance_repo.fail_attach = True

    with caplog.at_level(logging.ERROR):
        assert container.receipt_service.attach_receipt(sample_entry) is None

    assert "receipt attach failed" in caplog.text


def test_attach_receipt_for_incomplete_entry_returns_none(container, sample_entry):
    incomplete = replace(sample_entry, created_at=None)
    container.attendance_repo.add(incomplete)

    assert container.receipt_service.attach_receipt(incomplete) is None
    assert container.attendance_repo.get_by_id("e1").attendance_hash is None


def test_verify_receipt_valid(container, open_sheet, sample_entry):
    receipt, _ = _stored_entry(container, sample_entry)

    result = container.receipt_service.verify_receipt(receipt)

    assert result.status == VerificationStatus.VALID
    assert result.is_valid
    assert result.entry.entry_id == "e1"
    assert result.sheet.title == "Morning Muster"


def test_verify_receipt_accepts_display_format(container, sample_entry):
    receipt, _ = _stored_entry(container, sample_entry)

    result = container.receipt_service.verify_receipt("  " + format_hash_for_display(receipt) + "\n")

    assert result.status == VerificationStatus.VALID
    assert result.receipt == receipt


def test_verify_receipt_not_found(container):
    result = container.receipt_service.verify_receipt("ab" * 32)

    assert result.status == VerificationStatus.NOT_FOUND
    assert result.entry is None
    assert not result.is_valid


def test_verify_receipt_uppercase_is_not_found(container, sample_entry):
    receipt, _ = _stored_entry(container, sample_entry)

    result = container.receipt_service.verify_receipt(receipt.upper())

    assert result.status == VerificationStatus.NOT_FOUND


def test_verify_receipt_detects_tampered_record(container, sample_entry):
    receipt, stored = _stored_entry(container, sample_entry)
    container.attendance_repo.entries["e1"] = replace(stored, last_name="Smith")

    result = container.receipt_service.verify_receipt(receipt)

    assert result.status == VerificationStatus.TAMPERED
    assert not result.is_valid
    assert "record" not in result.to_dict()


@pytest.mark.parametrize("raw", ["", "   ", "not-a-receipt", "ab" * 31, None, 12345])
def test_verify_receipt_rejects_malformed_input_before_lookup(container, raw):
    looked_up = []
    container.attendance_repo.get_by_hash = lambda h: looked_up.append(h)

    with pytest.raises(MalformedReceiptError, match="Invalid receipt format"):
        container.receipt_service.verify_receipt(raw)

    assert looked_up == []


def test_verification_result_to_dict_for_valid(container, open_sheet, sample_entry):
    receipt, _ = _stored_entry(container, sample_entry)

    data = container.receipt_service.verify_receipt(receipt).to_dict()

    assert data["status"] == "valid"
    assert data["isValid"] is True
    assert data["receipt"] == format_hash_for_display(receipt)
    assert data["record"]["firstName"] == "Ann"
    assert data["sheet"] == {"id": "s1", "title": "Morning Muster"}
