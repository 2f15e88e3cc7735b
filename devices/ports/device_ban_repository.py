"""
Device ban registry port (interface).

This defines the contract for persisting banned device identifiers.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List

from devices.domain.device_ban import DeviceBan


class DeviceBanRepository(ABC):
    """
    Abstract repository for DeviceBan entries.

    Entries are unique under case-insensitive comparison.
    """

    @abstractmethod
    async def add(self, ban: DeviceBan) -> bool:
        """
        Add an entry unless a case-insensitive duplicate exists.

        Args:
            ban: DeviceBan entry

        Returns:
            True if the entry was added, False if it was already present
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[DeviceBan]:
        """
        Return every ban entry.

        Returns:
            List of DeviceBan entries in the order they were added
        """
        pass

    @abstractmethod
    async def remove(self, identifiers: Iterable[str]) -> int:
        """
        Remove entries by identifier (case-insensitive).

        Args:
            identifiers: Identifiers to remove

        Returns:
            Number of entries removed
        """
        pass
