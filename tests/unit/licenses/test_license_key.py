"""
Unit tests for the license key codec.
"""

import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from core.domain.exceptions import InvalidLicenseKeyError, MalformedInputError
from licenses.domain.license_key import (
    LicenseKey,
    LicenseKeyCodec,
    format_expiry,
    parse_expiry,
    rolling_hash,
    to_base36,
)

DEVICE_ID = "abcdef1234567890abcdef1234567890"
KEY_PATTERN = re.compile(r"^[A-Z0-9]+-[A-Z0-9]+(-\d{8})?-[0-9A-Z]{4}$")


class TestRollingHash:
    """Tests for the 32-bit polynomial hash."""

    def test_empty_string(self):
        """Test hash of the empty string."""
        assert rolling_hash("") == 0

    def test_known_values(self):
        """Test hash agrees with the classic h * 31 + c string hash."""
        assert rolling_hash("a") == 97
        assert rolling_hash("hello") == 99162322
        assert rolling_hash("Aa") == rolling_hash("BB") == 2112

    def test_wraps_to_signed_32_bit(self):
        """Test overflow wraps into the signed 32-bit range."""
        assert rolling_hash("polygenelubricants") == -(2**31)

    def test_base36(self):
        """Test uppercase base-36 rendering."""
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
        assert to_base36(2**31) == "ZIK0ZK"


class TestEncode:
    """Tests for key generation."""

    def test_key_with_expiry(self, codec):
        """Test a weekly key for a device with an embedded date."""
        key = codec.encode(DEVICE_ID, "WEEK", date(2025, 12, 31))

        assert key.startswith("WEEK-ABCDEF12-20251231-")
        assert re.match(r"^WEEK-ABCDEF12-20251231-[0-9A-Z]{4}$", key)

    def test_known_keys(self, codec):
        """Test keys issued under the default salt keep their exact checksums."""
        assert codec.encode("ABCDEF1234567890", "WEEK", date(2025, 12, 31)) == (
            "WEEK-ABCDEF12-20251231-IK7Z"
        )
        assert codec.encode("ABCDEF1234567890", "WEEK") == "WEEK-ABCDEF12-T247"

    def test_key_without_expiry_has_three_segments(self, codec):
        """Test a key without expiry."""
        key = codec.encode(DEVICE_ID, "MNTH")

        assert key.startswith("MNTH-ABCDEF12-")
        assert len(key.split("-")) == 3

    def test_deterministic(self, codec):
        """Test identical inputs give identical keys."""
        assert codec.encode(DEVICE_ID, "WEEK", date(2025, 12, 31)) == codec.encode(
            DEVICE_ID, "WEEK", date(2025, 12, 31)
        )

    def test_sensitive_to_every_input(self, codec):
        """Test changing any input changes the key."""
        base = codec.encode(DEVICE_ID, "WEEK", date(2025, 12, 31))

        assert codec.encode(DEVICE_ID, "DALY", date(2025, 12, 31)) != base
        assert codec.encode("11111111" + DEVICE_ID[8:], "WEEK", date(2025, 12, 31)) != base
        assert codec.encode(DEVICE_ID, "WEEK", date(2026, 1, 1)) != base
        other_salt = LicenseKeyCodec("ANOTHER_SALT")
        assert other_salt.encode(DEVICE_ID, "WEEK", date(2025, 12, 31)) != base

    def test_only_display_prefix_is_embedded(self, codec):
        """Test devices sharing a display prefix get the same key."""
        assert codec.encode(DEVICE_ID, "WEEK") == codec.encode(DEVICE_ID.upper()[:8] + "zz", "WEEK")

    def test_checksum_is_always_four_characters(self, codec):
        """Test checksum length across many devices."""
        for index in range(200):
            key = codec.encode(f"{index:08x}ffff", "DALY", date(2025, 1, 1))
            assert len(key.split("-")[-1]) == 4
            assert KEY_PATTERN.match(key)

    def test_tier_is_uppercased(self, codec):
        """Test tier codes are normalized."""
        assert codec.encode(DEVICE_ID, "week").startswith("WEEK-")

    def test_wildcard_key(self, codec):
        """Test ADMIN wildcard keys."""
        assert codec.encode("ADMIN", "WEEK").startswith("WEEK-ADMIN-")

    def test_missing_fields_rejected(self, codec):
        """Test empty device or tier is refused."""
        with pytest.raises(MalformedInputError):
            codec.encode("", "WEEK")
        with pytest.raises(MalformedInputError):
            codec.encode(DEVICE_ID, "")

    def test_separator_in_field_rejected(self, codec):
        """Test a '-' inside a field is refused."""
        with pytest.raises(MalformedInputError):
            codec.encode(DEVICE_ID, "WE-K")
        with pytest.raises(MalformedInputError):
            codec.encode("abc-defgh", "WEEK")

    def test_aware_expiry_uses_configured_zone(self):
        """Test the embedded date is the calendar date in the codec zone."""
        codec = LicenseKeyCodec("SALT", ZoneInfo("Asia/Tokyo"))
        moment = datetime(2025, 12, 31, 20, 0, tzinfo=timezone.utc)

        assert codec.encode(DEVICE_ID, "WEEK", moment).split("-")[2] == "20260101"


class TestDecodeAndVerify:
    """Tests for key parsing and checksum verification."""

    def test_decode_four_segments(self):
        """Test decoding a key with expiry."""
        key = LicenseKeyCodec.decode("WEEK-ABCDEF12-20251231-X1Y2")

        assert key == LicenseKey("WEEK", "ABCDEF12", "20251231", "X1Y2")
        assert str(key) == "WEEK-ABCDEF12-20251231-X1Y2"

    def test_decode_three_segments(self):
        """Test decoding a key without expiry."""
        key = LicenseKeyCodec.decode("MNTH-ABCDEF12-ZZZZ")

        assert key.expiry_field is None
        assert key.checksum == "ZZZZ"

    @pytest.mark.parametrize(
        "raw",
        ["", "WEEK", "WEEK-ABCDEF12", "A-B-C-D-E", "WEEK--20251231-ABCD", "WEEK-ABCDEF12-"],
    )
    def test_decode_rejects_bad_structure(self, raw):
        """Test keys that are not 3 or 4 non-empty segments."""
        with pytest.raises(InvalidLicenseKeyError):
            LicenseKeyCodec.decode(raw)

    def test_verify_generated_key(self, codec):
        """Test generated keys verify."""
        key = codec.encode(DEVICE_ID, "WEEK", date(2025, 12, 31))

        assert codec.verify(LicenseKeyCodec.decode(key)) is True

    def test_verify_detects_tampering(self, codec):
        """Test editing the expiry invalidates the checksum."""
        key = codec.encode(DEVICE_ID, "WEEK", date(2025, 12, 31))
        tampered = key.replace("20251231", "20991231")

        assert codec.verify(LicenseKeyCodec.decode(tampered)) is False

    def test_verify_with_wrong_salt(self, codec):
        """Test keys from another salt do not verify."""
        key = LicenseKeyCodec("ANOTHER_SALT").encode(DEVICE_ID, "WEEK")

        assert codec.verify(LicenseKeyCodec.decode(key)) is False

    def test_is_issued_for(self):
        """Test device segment matching."""
        key = LicenseKey("WEEK", "ABCDEF12", None, "0000")

        assert key.is_issued_for(DEVICE_ID, "ADMIN") is True
        assert key.is_issued_for(DEVICE_ID.upper(), "ADMIN") is True
        assert key.is_issued_for("99887766", "ADMIN") is False
        assert LicenseKey("WEEK", "ADMIN", None, "0000").is_issued_for("99887766", "ADMIN")


class TestExpiryFields:
    """Tests for expiry formatting and parsing."""

    def test_format_date(self):
        """Test formatting a date."""
        assert format_expiry(date(2025, 1, 5)) == "20250105"

    def test_parse_valid(self):
        """Test parsing gives the last second of the day."""
        parsed = parse_expiry("20251231", timezone.utc)

        assert parsed == datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc)

    @pytest.mark.parametrize("field", [None, "", "2025123", "2025-12-31", "20250230", "20251301"])
    def test_parse_invalid(self, field):
        """Test absent, malformed or impossible dates."""
        assert parse_expiry(field, timezone.utc) is None
