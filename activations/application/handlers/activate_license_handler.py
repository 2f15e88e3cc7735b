"""
ActivateLicenseHandler.

Handler for activating a license key on a device.
"""

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivateLicenseResponseDTO
from activations.domain.activation import ActivationOutcome, ActivationResult
from activations.domain.events import ActivationRejected, LicenseActivated, LicenseReverified
from activations.domain.services import ActivationProtocol
from core.domain.exceptions import (
    AlreadyBoundElsewhereError,
    DeviceBannedError,
    DeviceMismatchError,
    DomainException,
    InvalidLicenseKeyError,
    MalformedInputError,
)
from core.infrastructure.events import event_bus
from devices.domain.device_identity import display_prefix
from devices.domain.services import DeviceBanRegistry
from devices.ports.device_ban_repository import DeviceBanRepository
from licenses.domain.config import LicensingConfig
from licenses.domain.services import Clock, utcnow
from licenses.ports.license_repository import LicenseRepository

_MESSAGES = {
    ActivationOutcome.ALLOW_NEW: "License activated and locked to this device.",
    ActivationOutcome.ALLOW_REVERIFY: "License re-verified successfully.",
}


def rejection_error(result: ActivationResult) -> DomainException:
    """
    Map a rejected activation to the exception the request layer reports.

    Args:
        result: Non-ALLOW activation result

    Returns:
        Domain exception carrying the user-facing message
    """
    outcome = result.outcome
    if outcome == ActivationOutcome.REJECT_DEVICE_BANNED:
        return DeviceBannedError()
    if outcome == ActivationOutcome.REJECT_DEVICE_MISMATCH:
        return DeviceMismatchError()
    if outcome == ActivationOutcome.REJECT_OTHER_DEVICE:
        return AlreadyBoundElsewhereError()
    if result.detail and result.detail.startswith("Missing"):
        return MalformedInputError(result.detail)
    return InvalidLicenseKeyError()


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        config: LicensingConfig,
        license_repository: LicenseRepository,
        device_ban_repository: DeviceBanRepository,
        clock: Clock = utcnow,
    ):
        """Initialize handler with configuration and repositories."""
        self.protocol = ActivationProtocol(
            config=config,
            license_repository=license_repository,
            ban_registry=DeviceBanRegistry(device_ban_repository),
            clock=clock,
        )

    async def handle(self, command: ActivateLicenseCommand) -> ActivateLicenseResponseDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivateLicenseResponseDTO with tier and expiry

        Raises:
            MalformedInputError: If key or device is missing
            InvalidLicenseKeyError: If the key is not recognized
            DeviceBannedError: If the device is banned
            DeviceMismatchError: If the key was issued for another device
            AlreadyBoundElsewhereError: If the key is bound to another device
        """
        result = await self.protocol.activate(command.license_key, command.device_id)
        device_prefix = display_prefix(command.device_id or "")

        if not result.allowed:
            await event_bus.publish(
                ActivationRejected(
                    aggregate_id=command.license_key or "",
                    outcome=result.outcome.value,
                    device_prefix=device_prefix or None,
                )
            )
            raise rejection_error(result)

        if result.outcome == ActivationOutcome.ALLOW_NEW:
            await event_bus.publish(
                LicenseActivated(
                    aggregate_id=command.license_key,
                    device_prefix=device_prefix,
                    tier=result.tier,
                    expires_at=result.expires_at,
                )
            )
        else:
            await event_bus.publish(
                LicenseReverified(aggregate_id=command.license_key, device_prefix=device_prefix)
            )

        return ActivateLicenseResponseDTO(
            outcome=result.outcome.value,
            tier=result.tier,
            expiry_date=result.expires_at,
            message=_MESSAGES[result.outcome],
        )
