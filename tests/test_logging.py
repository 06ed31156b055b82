"""Tests for log sanitizing helpers"""
from menstyle.logging import (
    mask_phone_for_logging,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)


def test_sanitize_id_truncates():
    assert sanitize_id_for_logging("0123456789abcdef") == "01234567"
    assert sanitize_id_for_logging(None) == "N/A"


def test_sanitize_string_escapes_newlines():
    assert sanitize_string_for_logging("Ana\nFAKE ENTRY") == "Ana\\nFAKE ENTRY"
    assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."


def test_mask_phone():
    assert mask_phone_for_logging("(85) 99999-1234") == "***1234"
    assert mask_phone_for_logging("Venda Local") == "N/A"
