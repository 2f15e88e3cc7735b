"""
Unit tests for licensing configuration.
"""

import pytest

from core.domain.exceptions import UnknownTierError
from licenses.domain.config import DEFAULT_CHECKSUM_SALT, LicenseTier, LicensingConfig
from licenses.infrastructure.config import load_licensing_config


class TestLicensingConfig:
    """Tests for LicensingConfig."""

    def test_defaults(self):
        """Test default values."""
        config = LicensingConfig()

        assert config.checksum_salt == DEFAULT_CHECKSUM_SALT
        assert config.verify_checksum is True
        assert config.wildcard_device_prefix == "ADMIN"
        assert config.default_validity_years == 1
        assert config.time_zone == "UTC"

    @pytest.mark.parametrize(
        "name, code, days",
        [
            ("DAILY", "DALY", 1),
            ("daily", "DALY", 1),
            ("WEEK", "WEEK", 7),
            ("weekly", "WEEK", 7),
            ("MONTHLY", "MNTH", 30),
            ("mnth", "MNTH", 30),
        ],
    )
    def test_find_tier(self, name, code, days):
        """Test tier lookup by plan name or code, case-insensitive."""
        tier = LicensingConfig().get_tier(name)

        assert tier.code == code
        assert tier.duration_days == days

    def test_unknown_tier(self):
        """Test unknown plans."""
        config = LicensingConfig()

        assert config.find_tier("YEARLY") is None
        with pytest.raises(UnknownTierError):
            config.get_tier("YEARLY")

    def test_invalid_values(self):
        """Test validation."""
        with pytest.raises(ValueError):
            LicensingConfig(checksum_salt="")
        with pytest.raises(ValueError):
            LicensingConfig(default_validity_years=0)
        with pytest.raises(ValueError):
            LicenseTier(name="BAD", code="BA-D", duration_days=1)
        with pytest.raises(ValueError):
            LicenseTier(name="BAD", code="BAD", duration_days=0)


class TestLoadLicensingConfig:
    """Tests for building the config from Django settings."""

    def test_from_settings(self, settings):
        """Test the LICENSING settings dict is honoured."""
        settings.LICENSING = {
            "CHECKSUM_SALT": "PEPPER",
            "VERIFY_CHECKSUM": False,
            "TIME_ZONE": "Europe/Berlin",
            "TIERS": {"YEARLY": {"code": "YEAR", "duration_days": 365}},
        }

        config = load_licensing_config()

        assert config.checksum_salt == "PEPPER"
        assert config.verify_checksum is False
        assert config.time_zone == "Europe/Berlin"
        assert config.get_tier("YEARLY").duration_days == 365
        assert config.find_tier("WEEKLY") is None

    def test_empty_values_fall_back(self, settings):
        """Test blank settings use the built-in salt and Django's TIME_ZONE."""
        settings.LICENSING = {"CHECKSUM_SALT": "", "TIME_ZONE": ""}
        settings.TIME_ZONE = "UTC"

        config = load_licensing_config()

        assert config.checksum_salt == DEFAULT_CHECKSUM_SALT
        assert config.time_zone == "UTC"
        assert config.get_tier("WEEKLY").code == "WEEK"

    def test_overrides(self, settings):
        """Test explicit overrides win over settings."""
        settings.LICENSING = {"CHECKSUM_SALT": "PEPPER"}

        config = load_licensing_config({"CHECKSUM_SALT": "OVERRIDE"})

        assert config.checksum_salt == "OVERRIDE"
