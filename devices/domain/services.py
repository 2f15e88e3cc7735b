"""
Device domain services.

The ban registry answers membership questions with the prefix-tolerant
device matcher, and ban propagation cascades a device ban onto every
license already bound to a matching device.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from core.domain.exceptions import MalformedInputError
from core.domain.value_objects import LicenseStatus
from devices.domain.device_ban import DeviceBan
from devices.domain.device_identity import device_ids_match, display_prefix
from devices.ports.device_ban_repository import DeviceBanRepository
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def _require_device_id(device_id: str) -> None:
    if not device_id or not device_id.strip():
        raise MalformedInputError("Missing deviceId")


class DeviceBanRegistry:
    """Domain service over the persisted set of banned device identifiers."""

    def __init__(self, repository: DeviceBanRepository):
        """Initialize registry with its repository."""
        self.repository = repository

    async def is_banned(self, device_id: str) -> bool:
        """
        Check whether any registry entry matches a device identifier.

        Args:
            device_id: Full device hash or display prefix

        Returns:
            True if the device is banned
        """
        if not device_id:
            return False
        entries = await self.repository.find_all()
        return any(device_ids_match(device_id, entry.identifier) for entry in entries)

    async def add(self, device_id: str) -> bool:
        """
        Add a device identifier unless an exact (case-insensitive) duplicate exists.

        Returns:
            True if a new entry was stored
        """
        _require_device_id(device_id)
        return await self.repository.add(DeviceBan.create(device_id))

    async def remove_matching(self, device_id: str) -> List[str]:
        """
        Remove every entry that matches a device identifier.

        Unbanning a display prefix removes a banned full hash and the
        other way round.

        Returns:
            Identifiers that were removed
        """
        _require_device_id(device_id)
        entries = await self.repository.find_all()
        matched = [
            entry.identifier
            for entry in entries
            if device_ids_match(device_id, entry.identifier)
        ]
        if matched:
            await self.repository.remove(matched)
        return matched

    async def list_banned(self) -> List[DeviceBan]:
        """Return every ban entry."""
        return await self.repository.find_all()


@dataclass(frozen=True)
class BanDeviceResult:
    """Outcome of banning a device."""

    device_id: str
    newly_added: bool
    affected_license_keys: Tuple[str, ...] = field(default_factory=tuple)


class BanPropagation:
    """Domain service that applies device bans to bound license records."""

    def __init__(
        self,
        registry: DeviceBanRegistry,
        license_repository: LicenseRepository,
    ):
        """Initialize with the ban registry and the license ledger."""
        self.registry = registry
        self.license_repository = license_repository

    async def ban_device(self, device_id: str) -> BanDeviceResult:
        """
        Ban a device and every license bound to a matching device.

        Args:
            device_id: Full device hash or display prefix

        Returns:
            BanDeviceResult listing the license keys that were banned

        Raises:
            MalformedInputError: If device_id is empty
        """
        _require_device_id(device_id)
        newly_added = await self.registry.add(device_id)

        candidates = await self.license_repository.find_by_device_prefix(device_id)
        affected = tuple(
            record.key
            for record in candidates
            if record.is_bound_to_device_matching(device_id)
        )
        if affected:
            await self.license_repository.update_status(affected, LicenseStatus.BANNED)

        logger.info(
            "Device banned: %s | Also banned %d license(s)",
            display_prefix(device_id),
            len(affected),
            extra={"device_prefix": display_prefix(device_id), "license_keys": list(affected)},
        )
        return BanDeviceResult(
            device_id=device_id,
            newly_added=newly_added,
            affected_license_keys=affected,
        )

    async def unban_device(self, device_id: str) -> List[str]:
        """
        Remove matching registry entries.

        License records banned by an earlier device ban stay banned; they
        need an explicit license unban.

        Returns:
            Identifiers that were removed from the registry
        """
        removed = await self.registry.remove_matching(device_id)
        logger.info(
            "Device unbanned: %s | Removed %d ban entries",
            display_prefix(device_id),
            len(removed),
        )
        return removed
