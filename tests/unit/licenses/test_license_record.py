"""
Unit tests for LicenseRecord entity.
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import LicenseRecord

DEVICE_ID = "abcdef1234567890abcdef1234567890"
EXPIRES = datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc)


class TestLicenseRecord:
    """Tests for LicenseRecord entity."""

    def test_create(self):
        """Test creating a record."""
        record = LicenseRecord.create(
            key="WEEK-ABCDEF12-20251231-ABCD",
            tier="WEEK",
            bound_device_id=DEVICE_ID,
            expires_at=EXPIRES,
        )

        assert record.id is not None
        assert record.status == LicenseStatus.ACTIVE
        assert record.owner_user_id == 0
        assert record.bound_device_prefix == "ABCDEF12"
        assert record.created_at == record.updated_at

    def test_empty_key_rejected(self):
        """Test validation of the key."""
        with pytest.raises(ValueError, match="cannot be empty"):
            LicenseRecord.create(key="", tier="WEEK", bound_device_id=DEVICE_ID, expires_at=EXPIRES)

    def test_empty_device_rejected(self):
        """Test validation of the bound device."""
        with pytest.raises(ValueError, match="Bound device"):
            LicenseRecord.create(key="K-E-Y", tier="WEEK", bound_device_id=" ", expires_at=EXPIRES)

    def test_ban_and_unban(self, sample_record):
        """Test status transitions return new entities."""
        banned = sample_record.ban()

        assert banned.is_banned is True
        assert sample_record.is_banned is False
        assert banned.bound_device_id == sample_record.bound_device_id
        assert banned.unban().status == LicenseStatus.ACTIVE

    def test_is_bound_to_is_exact(self, sample_record):
        """Test re-verification compares full identifiers."""
        assert sample_record.is_bound_to(DEVICE_ID) is True
        assert sample_record.is_bound_to(DEVICE_ID[:8]) is False
        assert sample_record.is_bound_to(DEVICE_ID.upper()) is False

    def test_is_bound_to_device_matching_is_prefix_tolerant(self, sample_record):
        """Test ban propagation matching."""
        assert sample_record.is_bound_to_device_matching("ABCDEF12") is True
        assert sample_record.is_bound_to_device_matching(DEVICE_ID.upper()) is True
        assert sample_record.is_bound_to_device_matching("99887766") is False

    def test_is_expired(self, sample_record):
        """Test expiry check."""
        assert sample_record.is_expired(EXPIRES - timedelta(seconds=1)) is False
        assert sample_record.is_expired(EXPIRES + timedelta(seconds=1)) is True
