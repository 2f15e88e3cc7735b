"""
License lifecycle handlers.

Handlers for ban and unban license commands.
"""
from core.infrastructure.events import event_bus
from licenses.application.commands.ban_license import BanLicenseCommand, UnbanLicenseCommand
from licenses.domain.events import LicenseBanned, LicenseUnbanned
from licenses.domain.license import LicenseRecord
from licenses.domain.services import LicenseLifecycleManager
from licenses.ports.license_repository import LicenseRepository


class BanLicenseHandler:
    """Handler for BanLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: BanLicenseCommand) -> LicenseRecord:
        """
        Handle ban license command.

        Args:
            command: BanLicenseCommand

        Returns:
            Banned LicenseRecord

        Raises:
            MalformedInputError: If the key is missing
            LicenseNotFoundError: If the key is not in the ledger
        """
        banned = await LicenseLifecycleManager.ban_license(
            command.license_key, self.license_repository
        )

        await event_bus.publish(LicenseBanned(aggregate_id=banned.key))

        return banned


class UnbanLicenseHandler:
    """Handler for UnbanLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: UnbanLicenseCommand) -> LicenseRecord:
        """
        Handle unban license command.

        Raises:
            MalformedInputError: If the key is missing
            LicenseNotFoundError: If the key is not in the ledger
        """
        restored = await LicenseLifecycleManager.unban_license(
            command.license_key, self.license_repository
        )

        await event_bus.publish(LicenseUnbanned(aggregate_id=restored.key))

        return restored
