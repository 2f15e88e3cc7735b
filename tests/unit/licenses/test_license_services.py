"""
Unit tests for License domain services.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from core.domain.exceptions import LicenseNotFoundError, MalformedInputError, UnknownTierError
from core.domain.value_objects import LicenseStatus, StatusReason
from licenses.domain.config import LicensingConfig
from licenses.domain.services import (
    LicenseKeyIssuer,
    LicenseLifecycleManager,
    LicenseStatusChecker,
)

DEVICE_A = "abcdef1234567890abcdef1234567890"
DEVICE_B = "99887766554433221100ffeeddccbbaa"
FIXED_NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


class TestLicenseKeyIssuer:
    """Tests for LicenseKeyIssuer service."""

    def test_issue_weekly(self, licensing_config, codec, fixed_clock):
        """Test a weekly plan expires at the end of the day a week from now."""
        issuer = LicenseKeyIssuer(licensing_config, clock=fixed_clock)

        issued = issuer.issue(DEVICE_A, "WEEKLY")

        assert issued.tier.code == "WEEK"
        assert issued.expires_at == datetime(2025, 6, 22, 23, 59, 59, tzinfo=timezone.utc)
        assert issued.key.startswith("WEEK-ABCDEF12-20250622-")
        assert codec.verify(codec.decode(issued.key))

    def test_issue_uses_configured_zone(self, fixed_clock):
        """Test the embedded date and expiry follow the configured zone."""
        config = LicensingConfig(time_zone="Pacific/Kiritimati")
        issuer = LicenseKeyIssuer(config, clock=fixed_clock)

        issued = issuer.issue(DEVICE_A, "DAILY")

        tz = ZoneInfo("Pacific/Kiritimati")
        assert issued.expires_at == datetime(2025, 6, 17, 23, 59, 59, tzinfo=tz)
        assert issued.key.startswith("DALY-ABCDEF12-20250617-")

    def test_issue_by_tier_code(self, licensing_config, fixed_clock):
        """Test plans can be selected by tier code."""
        issuer = LicenseKeyIssuer(licensing_config, clock=fixed_clock)

        issued = issuer.issue(DEVICE_A, "daly")

        assert issued.tier.name == "DAILY"
        assert issued.key.startswith("DALY-ABCDEF12-20250616-")

    def test_issue_unknown_tier(self, licensing_config):
        """Test unknown plans are refused."""
        with pytest.raises(UnknownTierError):
            LicenseKeyIssuer(licensing_config).issue(DEVICE_A, "LIFETIME")

    def test_issue_without_device(self, licensing_config):
        """Test a device identifier is required."""
        with pytest.raises(MalformedInputError):
            LicenseKeyIssuer(licensing_config).issue("", "WEEKLY")

    def test_generate_matches_codec(self, licensing_config, codec):
        """Test generate is the codec encode."""
        issuer = LicenseKeyIssuer(licensing_config)

        assert issuer.generate(DEVICE_A, "WEEK") == codec.encode(DEVICE_A, "WEEK")


@pytest.mark.asyncio
class TestLicenseLifecycleManager:
    """Tests for LicenseLifecycleManager service."""

    async def test_ban_and_unban(self, memory_license_repository, sample_record):
        """Test banning and restoring a license."""
        await memory_license_repository.bind(sample_record)

        banned = await LicenseLifecycleManager.ban_license(
            sample_record.key, memory_license_repository
        )
        assert banned.status == LicenseStatus.BANNED
        stored = await memory_license_repository.find_by_key(sample_record.key)
        assert stored.status == LicenseStatus.BANNED

        restored = await LicenseLifecycleManager.unban_license(
            sample_record.key, memory_license_repository
        )
        assert restored.status == LicenseStatus.ACTIVE
        stored = await memory_license_repository.find_by_key(sample_record.key)
        assert stored.status == LicenseStatus.ACTIVE

    async def test_unknown_key(self, memory_license_repository):
        """Test banning a key that was never activated."""
        with pytest.raises(LicenseNotFoundError):
            await LicenseLifecycleManager.ban_license("NOPE-NOPE-0000", memory_license_repository)
        with pytest.raises(LicenseNotFoundError):
            await LicenseLifecycleManager.unban_license("NOPE-NOPE-0000", memory_license_repository)

    async def test_missing_key(self, memory_license_repository):
        """Test an empty key."""
        with pytest.raises(MalformedInputError):
            await LicenseLifecycleManager.ban_license("", memory_license_repository)


@pytest.mark.asyncio
class TestLicenseStatusChecker:
    """Tests for LicenseStatusChecker service."""

    @pytest.fixture
    def checker(self, memory_license_repository, memory_ban_registry):
        return LicenseStatusChecker(memory_license_repository, memory_ban_registry)

    async def test_unknown_key_is_active(self, checker):
        """Test keys that were never activated report active."""
        check = await checker.check("WEEK-ABCDEF12-0000")

        assert check.status == LicenseStatus.ACTIVE
        assert check.reason == StatusReason.NOT_ACTIVATED
        assert check.record is None

    async def test_active_record(self, checker, memory_license_repository, sample_record):
        """Test an activated, unbanned license."""
        await memory_license_repository.bind(sample_record)

        check = await checker.check(sample_record.key, DEVICE_A)

        assert check.status == LicenseStatus.ACTIVE
        assert check.reason == StatusReason.ACTIVE
        assert check.message == "License is active."

    async def test_banned_record(self, checker, memory_license_repository, sample_record):
        """Test a license banned by an administrator."""
        await memory_license_repository.bind(sample_record.ban())

        check = await checker.check(sample_record.key)

        assert check.status == LicenseStatus.BANNED
        assert check.reason == StatusReason.LICENSE_BANNED
        assert "administrator" in check.message

    async def test_asking_device_banned_wins(
        self, checker, memory_license_repository, memory_ban_registry, sample_record
    ):
        """Test a banned asking device is reported before anything else."""
        await memory_ban_registry.add(DEVICE_B[:8])

        check = await checker.check("never-activated-key", DEVICE_B)
        assert check.status == LicenseStatus.BANNED
        assert check.reason == StatusReason.DEVICE_BANNED

        await memory_license_repository.bind(sample_record.ban())
        check = await checker.check(sample_record.key, DEVICE_B)
        assert check.reason == StatusReason.DEVICE_BANNED

    async def test_bound_device_banned(
        self, checker, memory_license_repository, memory_ban_registry, sample_record
    ):
        """Test a license whose bound device is banned, without a device in the request."""
        await memory_license_repository.bind(sample_record)
        await memory_ban_registry.add("ABCDEF12")

        check = await checker.check(sample_record.key)

        assert check.status == LicenseStatus.BANNED
        assert check.reason == StatusReason.BOUND_DEVICE_BANNED
        assert "device" in check.message

    async def test_missing_key(self, checker):
        """Test an empty key."""
        with pytest.raises(MalformedInputError):
            await checker.check("")
