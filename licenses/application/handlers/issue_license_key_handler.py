"""
IssueLicenseKeyHandler.

Handler for generating license keys.
"""
import logging
from datetime import datetime, time

from core.infrastructure.events import event_bus
from devices.domain.device_identity import display_prefix
from licenses.application.commands.issue_license_key import IssueLicenseKeyCommand
from licenses.application.dto.license_dto import IssuedLicenseKeyDTO
from licenses.domain.config import LicensingConfig
from licenses.domain.events import LicenseKeyIssued
from licenses.domain.services import Clock, LicenseKeyIssuer, utcnow

logger = logging.getLogger(__name__)


class IssueLicenseKeyHandler:
    """Handler for IssueLicenseKeyCommand."""

    def __init__(self, config: LicensingConfig, clock: Clock = utcnow):
        """Initialize handler with licensing configuration."""
        self.config = config
        self.issuer = LicenseKeyIssuer(config, clock=clock)

    async def handle(self, command: IssueLicenseKeyCommand) -> IssuedLicenseKeyDTO:
        """
        Handle issue license key command.

        Nothing is written to the ledger; the key is recorded when it is
        first activated.

        Args:
            command: IssueLicenseKeyCommand

        Returns:
            IssuedLicenseKeyDTO with the key and its expiry

        Raises:
            MalformedInputError: If the device identifier is missing
            UnknownTierError: If the plan is not in the catalogue
        """
        if command.expiry_date is not None:
            tier = self.config.get_tier(command.tier)
            key = self.issuer.generate(command.device_id, tier.code, command.expiry_date)
            expires_at = datetime.combine(
                command.expiry_date, time(23, 59, 59), tzinfo=self.config.tzinfo
            )
        else:
            issued = self.issuer.issue(command.device_id, command.tier)
            tier, key, expires_at = issued.tier, issued.key, issued.expires_at

        device_prefix = display_prefix(command.device_id)
        logger.info(
            "License key issued: %s for device %s",
            tier.code,
            device_prefix,
            extra={"tier": tier.name, "device_prefix": device_prefix},
        )

        await event_bus.publish(
            LicenseKeyIssued(
                aggregate_id=key,
                tier=tier.code,
                device_prefix=device_prefix,
                expires_at=expires_at,
            )
        )

        return IssuedLicenseKeyDTO(
            license_key=key,
            tier=tier.name,
            tier_code=tier.code,
            expiry_date=expires_at,
        )
