"""
Licensing configuration.

An explicit configuration object handed to the key codec, the key issuer
and the activation protocol when they are constructed.
"""
from dataclasses import dataclass
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from core.domain.exceptions import UnknownTierError

DEFAULT_CHECKSUM_SALT = "SECRET_SALT_2025"
WILDCARD_DEVICE_PREFIX = "ADMIN"


@dataclass(frozen=True)
class LicenseTier:
    """A purchasable plan and the tier code embedded in its keys."""

    name: str
    code: str
    duration_days: int

    def __post_init__(self):
        """Validate tier."""
        if not self.code or "-" in self.code:
            raise ValueError(f"Invalid tier code: {self.code!r}")
        if self.duration_days < 1:
            raise ValueError("Tier duration must be at least one day")


DEFAULT_TIERS: Tuple[LicenseTier, ...] = (
    LicenseTier(name="DAILY", code="DALY", duration_days=1),
    LicenseTier(name="WEEKLY", code="WEEK", duration_days=7),
    LicenseTier(name="MONTHLY", code="MNTH", duration_days=30),
)


@dataclass(frozen=True)
class LicensingConfig:
    """
    Licensing configuration.

    Attributes:
        checksum_salt: Secret mixed into every key checksum
        verify_checksum: Recompute and enforce the checksum on first activation
        wildcard_device_prefix: Device segment accepted for any device
        default_validity_years: Validity applied when a key carries no expiry
        time_zone: Zone whose calendar dates are embedded in keys
        tiers: Plan catalogue used by key issuance
    """

    checksum_salt: str = DEFAULT_CHECKSUM_SALT
    verify_checksum: bool = True
    wildcard_device_prefix: str = WILDCARD_DEVICE_PREFIX
    default_validity_years: int = 1
    time_zone: str = "UTC"
    tiers: Tuple[LicenseTier, ...] = DEFAULT_TIERS

    def __post_init__(self):
        """Validate configuration."""
        if not self.checksum_salt:
            raise ValueError("Checksum salt cannot be empty")
        if self.default_validity_years < 1:
            raise ValueError("Default validity must be at least one year")

    @property
    def tzinfo(self) -> ZoneInfo:
        """Zone used for embedded expiry dates."""
        return ZoneInfo(self.time_zone)

    def find_tier(self, name_or_code: str) -> Optional[LicenseTier]:
        """Look up a tier by plan name or tier code."""
        wanted = name_or_code.upper()
        for tier in self.tiers:
            if wanted in (tier.name.upper(), tier.code.upper()):
                return tier
        return None

    def get_tier(self, name_or_code: str) -> LicenseTier:
        """
        Look up a tier by plan name or tier code.

        Raises:
            UnknownTierError: If the plan is not in the catalogue
        """
        tier = self.find_tier(name_or_code)
        if tier is None:
            raise UnknownTierError(f"Invalid tier selected: {name_or_code}")
        return tier
