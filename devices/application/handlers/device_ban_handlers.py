"""
Device ban handlers.

Handlers for ban device, unban device and list banned devices.
"""
from typing import List

from core.infrastructure.events import event_bus
from devices.application.commands.ban_device import BanDeviceCommand, UnbanDeviceCommand
from devices.application.dto.device_dto import (
    BanDeviceResponseDTO,
    DeviceBanDTO,
    UnbanDeviceResponseDTO,
)
from devices.application.queries.list_banned_devices import ListBannedDevicesQuery
from devices.domain.device_identity import display_prefix
from devices.domain.events import DeviceBanned, DeviceUnbanned
from devices.domain.services import BanPropagation, DeviceBanRegistry
from devices.ports.device_ban_repository import DeviceBanRepository
from licenses.ports.license_repository import LicenseRepository


class BanDeviceHandler:
    """Handler for BanDeviceCommand."""

    def __init__(
        self,
        device_ban_repository: DeviceBanRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.propagation = BanPropagation(
            DeviceBanRegistry(device_ban_repository), license_repository
        )

    async def handle(self, command: BanDeviceCommand) -> BanDeviceResponseDTO:
        """
        Handle ban device command.

        Args:
            command: BanDeviceCommand

        Returns:
            BanDeviceResponseDTO listing the licenses banned with the device

        Raises:
            MalformedInputError: If the device identifier is missing
        """
        result = await self.propagation.ban_device(command.device_id)
        device_prefix = display_prefix(command.device_id)

        await event_bus.publish(
            DeviceBanned(
                aggregate_id=device_prefix,
                newly_added=result.newly_added,
                affected_license_keys=result.affected_license_keys,
            )
        )

        return BanDeviceResponseDTO(
            device_prefix=device_prefix,
            newly_added=result.newly_added,
            banned_license_keys=list(result.affected_license_keys),
        )


class UnbanDeviceHandler:
    """Handler for UnbanDeviceCommand."""

    def __init__(
        self,
        device_ban_repository: DeviceBanRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.propagation = BanPropagation(
            DeviceBanRegistry(device_ban_repository), license_repository
        )

    async def handle(self, command: UnbanDeviceCommand) -> UnbanDeviceResponseDTO:
        """
        Handle unban device command.

        Licenses banned along with the device keep their status.

        Raises:
            MalformedInputError: If the device identifier is missing
        """
        removed = await self.propagation.unban_device(command.device_id)
        device_prefix = display_prefix(command.device_id)

        if removed:
            await event_bus.publish(
                DeviceUnbanned(
                    aggregate_id=device_prefix,
                    removed_identifiers=tuple(display_prefix(item) for item in removed),
                )
            )

        return UnbanDeviceResponseDTO(device_prefix=device_prefix, removed=len(removed))


class ListBannedDevicesHandler:
    """Handler for ListBannedDevicesQuery."""

    def __init__(self, device_ban_repository: DeviceBanRepository):
        """Initialize handler with repository."""
        self.registry = DeviceBanRegistry(device_ban_repository)

    async def handle(self, query: ListBannedDevicesQuery) -> List[DeviceBanDTO]:
        """Handle list banned devices query."""
        entries = await self.registry.list_banned()
        return [
            DeviceBanDTO(
                id=entry.id,
                device_prefix=display_prefix(entry.identifier),
                created_at=entry.created_at,
            )
            for entry in entries
        ]
