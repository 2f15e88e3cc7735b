"""
License domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional, Union

from core.domain.exceptions import LicenseNotFoundError, MalformedInputError
from core.domain.value_objects import LicenseStatus, StatusReason
from devices.domain.services import DeviceBanRegistry
from licenses.domain.config import LicensingConfig, LicenseTier
from licenses.domain.license import LicenseRecord
from licenses.domain.license_key import LicenseKeyCodec
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class IssuedLicenseKey:
    """A freshly generated key for a purchased plan."""

    key: str
    tier: LicenseTier
    expires_at: datetime


class LicenseKeyIssuer:
    """Domain service for license key generation."""

    def __init__(
        self,
        config: LicensingConfig,
        codec: Optional[LicenseKeyCodec] = None,
        clock: Clock = utcnow,
    ):
        """
        Initialize issuer.

        Args:
            config: Licensing configuration
            codec: Key codec (built from config if not provided)
            clock: Source of the current time
        """
        self.config = config
        self.codec = codec or LicenseKeyCodec(config.checksum_salt, config.tzinfo)
        self.clock = clock

    def generate(
        self,
        device_id: str,
        tier_code: str,
        expiry: Optional[Union[date, datetime]] = None,
    ) -> str:
        """
        Generate a license key for a device.

        Args:
            device_id: Full device identifier
            tier_code: Tier code embedded in the key
            expiry: Optional expiry date embedded in the key

        Returns:
            License key string
        """
        return self.codec.encode(device_id, tier_code, expiry)

    def issue(self, device_id: str, tier_name: str) -> IssuedLicenseKey:
        """
        Generate the key for a completed purchase of a plan.

        The key embeds the date that lies the plan duration after now, in
        the configured time zone; the reported expiry is the end of that
        day, matching what activation records.

        Args:
            device_id: Full device identifier of the buyer
            tier_name: Plan name (``WEEKLY``) or tier code (``WEEK``)

        Returns:
            IssuedLicenseKey with key, tier and expiry

        Raises:
            UnknownTierError: If the plan is not in the catalogue
            MalformedInputError: If the device identifier is missing
        """
        if not device_id:
            raise MalformedInputError("Missing required fields: tier and deviceId")
        tier = self.config.get_tier(tier_name)
        expiry_day = (
            (self.clock() + timedelta(days=tier.duration_days)).astimezone(self.config.tzinfo).date()
        )
        expires_at = datetime.combine(expiry_day, time(23, 59, 59), tzinfo=self.config.tzinfo)
        key = self.generate(device_id, tier.code, expiry_day)
        return IssuedLicenseKey(key=key, tier=tier, expires_at=expires_at)


class LicenseLifecycleManager:
    """Domain service for administrative license status changes."""

    @staticmethod
    async def ban_license(key: str, repository: LicenseRepository) -> LicenseRecord:
        """
        Ban a single license.

        Args:
            key: License key string
            repository: License ledger

        Returns:
            Banned license record

        Raises:
            LicenseNotFoundError: If the key is not in the ledger
        """
        record = await LicenseLifecycleManager._get(key, repository)
        banned = record.ban()
        await repository.update_status([key], banned.status)
        return banned

    @staticmethod
    async def unban_license(key: str, repository: LicenseRepository) -> LicenseRecord:
        """
        Restore a license to active, regardless of why it was banned.

        Raises:
            LicenseNotFoundError: If the key is not in the ledger
        """
        record = await LicenseLifecycleManager._get(key, repository)
        restored = record.unban()
        await repository.update_status([key], restored.status)
        return restored

    @staticmethod
    async def _get(key: str, repository: LicenseRepository) -> LicenseRecord:
        if not key:
            raise MalformedInputError("Missing licenseKey")
        record = await repository.find_by_key(key)
        if record is None:
            raise LicenseNotFoundError("License key not found in database.")
        return record


@dataclass(frozen=True)
class LicenseCheck:
    """Result of a read-only validity check."""

    status: LicenseStatus
    reason: StatusReason
    record: Optional[LicenseRecord] = None

    @property
    def message(self) -> str:
        """Human-readable explanation for the client."""
        if self.reason in (StatusReason.DEVICE_BANNED, StatusReason.BOUND_DEVICE_BANNED):
            return "Your device has been banned from using this service."
        if self.reason == StatusReason.LICENSE_BANNED:
            return "This license has been banned by the administrator."
        if self.reason == StatusReason.NOT_ACTIVATED:
            return "This license key has not been activated yet."
        return "License is active."


class LicenseStatusChecker:
    """Domain service for the read-only validity check."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        ban_registry: DeviceBanRegistry,
    ):
        """Initialize with the license ledger and the ban registry."""
        self.license_repository = license_repository
        self.ban_registry = ban_registry

    async def check(self, key: str, device_id: Optional[str] = None) -> LicenseCheck:
        """
        Report whether a license is active or banned.

        Precedence: a ban on the supplied device, then a banned record,
        then a ban on the record's bound device, then the record's status.
        Unknown keys are reported active.

        Args:
            key: License key string
            device_id: Optional identifier of the asking device

        Returns:
            LicenseCheck with status and reason

        Raises:
            MalformedInputError: If key is empty
        """
        if not key:
            raise MalformedInputError("Missing licenseKey")

        if device_id and await self.ban_registry.is_banned(device_id):
            return LicenseCheck(LicenseStatus.BANNED, StatusReason.DEVICE_BANNED)

        record = await self.license_repository.find_by_key(key)
        if record is None:
            return LicenseCheck(LicenseStatus.ACTIVE, StatusReason.NOT_ACTIVATED)

        if record.is_banned:
            return LicenseCheck(LicenseStatus.BANNED, StatusReason.LICENSE_BANNED, record)

        if await self.ban_registry.is_banned(record.bound_device_id):
            return LicenseCheck(LicenseStatus.BANNED, StatusReason.BOUND_DEVICE_BANNED, record)

        return LicenseCheck(record.status, StatusReason.ACTIVE, record)
