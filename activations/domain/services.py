"""
Activation domain services.

The activation protocol burns a license key onto the first device that
activates it. Later activations from that device are re-verifications;
activations from any other device are refused for good.
"""

import logging
from datetime import datetime
from typing import Optional

from activations.domain.activation import ActivationOutcome, ActivationResult
from core.domain.exceptions import InvalidLicenseKeyError
from core.domain.value_objects import LicenseStatus
from devices.domain.device_identity import display_prefix
from devices.domain.services import DeviceBanRegistry
from licenses.domain.config import LicensingConfig
from licenses.domain.license import LicenseRecord
from licenses.domain.license_key import LicenseKey, LicenseKeyCodec, parse_expiry
from licenses.domain.services import Clock, utcnow
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def add_years(moment: datetime, years: int) -> datetime:
    """Add calendar years; 29 February rolls over to 1 March."""
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, month=3, day=1)


class ActivationProtocol:
    """Domain service deciding ALLOW / REJECT for activation attempts."""

    def __init__(
        self,
        config: LicensingConfig,
        license_repository: LicenseRepository,
        ban_registry: DeviceBanRegistry,
        codec: Optional[LicenseKeyCodec] = None,
        clock: Clock = utcnow,
    ):
        """
        Initialize protocol.

        Args:
            config: Licensing configuration
            license_repository: License ledger
            ban_registry: Device ban registry
            codec: Key codec (built from config if not provided)
            clock: Source of the current time
        """
        self.config = config
        self.license_repository = license_repository
        self.ban_registry = ban_registry
        self.codec = codec or LicenseKeyCodec(config.checksum_salt, config.tzinfo)
        self.clock = clock

    async def activate(self, license_key: str, device_id: str) -> ActivationResult:
        """
        Activate or re-verify a license key on a device.

        Checks run in a fixed order and the first failing check decides:
        missing input, banned device, existing binding, key structure and
        checksum, embedded device segment.

        Args:
            license_key: License key string
            device_id: Full device identifier

        Returns:
            ActivationResult; ALLOW results carry tier and expiry
        """
        if not license_key or not device_id:
            return ActivationResult.reject(
                ActivationOutcome.ERROR_MALFORMED, "Missing licenseKey or deviceId"
            )

        if await self.ban_registry.is_banned(device_id):
            return self._rejected(ActivationOutcome.REJECT_DEVICE_BANNED, license_key, device_id)

        existing = await self.license_repository.find_by_key(license_key)
        if existing is not None:
            return self._decide_for_bound(existing, device_id)

        try:
            key = self.codec.decode(license_key)
        except InvalidLicenseKeyError:
            return self._rejected(ActivationOutcome.ERROR_MALFORMED, license_key, device_id)

        if self.config.verify_checksum and not self.codec.verify(key):
            return self._rejected(
                ActivationOutcome.ERROR_MALFORMED, license_key, device_id, "checksum mismatch"
            )

        if not key.is_issued_for(device_id, self.config.wildcard_device_prefix):
            return self._rejected(ActivationOutcome.REJECT_DEVICE_MISMATCH, license_key, device_id)

        try:
            record = LicenseRecord.create(
                key=license_key,
                tier=key.tier_code,
                bound_device_id=device_id,
                expires_at=self._expiry_for(key),
                now=self.clock(),
            )
        except ValueError as e:
            return self._rejected(ActivationOutcome.ERROR_MALFORMED, license_key, device_id, str(e))
        stored, created = await self.license_repository.bind(record)
        if not created:
            # Another request bound the key between our lookup and insert.
            return self._decide_for_bound(stored, device_id)

        # A ban that landed after the first check found no record to cascade to.
        if await self.ban_registry.is_banned(device_id):
            await self.license_repository.update_status([license_key], LicenseStatus.BANNED)
            return self._rejected(
                ActivationOutcome.REJECT_DEVICE_BANNED,
                license_key,
                device_id,
                "device banned during activation",
                stored.ban(),
            )

        logger.info(
            "License activated and locked to device %s",
            display_prefix(device_id),
            extra={"license_key": license_key, "tier": stored.tier},
        )
        return ActivationResult.allow(ActivationOutcome.ALLOW_NEW, stored)

    def _decide_for_bound(self, record: LicenseRecord, device_id: str) -> ActivationResult:
        if record.is_bound_to(device_id):
            logger.info(
                "License re-verified on device %s",
                display_prefix(device_id),
                extra={"license_key": record.key},
            )
            return ActivationResult.allow(ActivationOutcome.ALLOW_REVERIFY, record)
        return self._rejected(
            ActivationOutcome.REJECT_OTHER_DEVICE, record.key, device_id, record=record
        )

    def _expiry_for(self, key: LicenseKey) -> datetime:
        expires_at = parse_expiry(key.expiry_field, self.config.tzinfo)
        if expires_at is None:
            expires_at = add_years(self.clock(), self.config.default_validity_years)
        return expires_at

    def _rejected(
        self,
        outcome: ActivationOutcome,
        license_key: str,
        device_id: str,
        detail: Optional[str] = None,
        record: Optional[LicenseRecord] = None,
    ) -> ActivationResult:
        logger.warning(
            "Activation rejected: %s",
            outcome,
            extra={
                "license_key": license_key,
                "device_prefix": display_prefix(device_id),
                "detail": detail,
            },
        )
        return ActivationResult.reject(outcome, detail, record)
