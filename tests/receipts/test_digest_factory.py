import logging
from dataclasses import replace

from src.muster_sheets.muster_sheets.receipts.digests import SecureDigest, WeakDigest
from src.muster_sheets.muster_sheets.receipts.factory import DigestFactory, sha256_available
from src.muster_sheets.muster_sheets.receipts.formatting import is_valid_hash_format
from src.muster_sheets.muster_sheets.receipts.service import ReceiptService


def test_factory_prefers_sha256_when_available():
    assert sha256_available() is True

    digest = DigestFactory().detect()

    assert isinstance(digest, SecureDigest)
    assert digest.is_secure


def test_factory_falls_back_to_weak_digest_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        digest = DigestFactory(probe=lambda: False).detect()

    assert isinstance(digest, WeakDigest)
    assert not digest.is_secure
    assert any(r.levelno == logging.WARNING and "can be forged" in r.getMessage() for r in caplog.records)


def test_secure_digest_is_lowercase_sha256_hex():
    out = SecureDigest().hexdigest("")

    assert out == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_weak_digest_rolls_utf16_units_and_pads():
    weak = WeakDigest()

    assert weak.hexdigest("a") == "61" + "0" * 62
    assert weak.hexdigest("ab") == "c21" + "0" * 61


def test_weak_digest_output_shape_for_long_input():
    out = WeakDigest().hexdigest('{"id":"e1","firstName":"ann"}' * 20)

    assert len(out) == 64
    assert all(c in "0123456789abcdef" for c in out)


def test_weak_digest_of_empty_text_is_all_zeros():
    assert WeakDigest().hexdigest("") == "0" * 64


def test_weak_digest_receipts_still_verify(entries_repo, sample_entry):
    service = ReceiptService(entries_repo, digest=WeakDigest())
    receipt = service.generate_hash(sample_entry)

    assert len(receipt) == 64
    assert is_valid_hash_format(receipt)
    assert receipt == service.generate_hash(sample_entry)
    assert receipt != service.generate_hash(replace(sample_entry, last_name="Smith"))
    assert service.verify_hash(receipt, sample_entry)
