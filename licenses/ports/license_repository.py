"""
License ledger port (interface).

This defines the contract for license record persistence operations.
Implementations are in the infrastructure layer and must allow at most
one in-flight mutation per license key.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import LicenseRecord


class LicenseRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def bind(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        """
        Insert a record unless one already exists for its key.

        The check and the insert are atomic: when two callers race to bind
        the same key, exactly one of them gets ``created=True``.

        Args:
            record: New LicenseRecord to insert

        Returns:
            Tuple of (stored record, created)
        """
        pass

    @abstractmethod
    async def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by key string.

        Args:
            key: License key string

        Returns:
            LicenseRecord entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_device_prefix(self, device_id: str) -> List[LicenseRecord]:
        """
        Find records whose bound device could match a device identifier.

        This is a coarse index lookup on the bound device's display
        prefix; callers apply the exact matching rule themselves.

        Args:
            device_id: Full identifier or display prefix

        Returns:
            Candidate LicenseRecord entities
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[LicenseRecord]:
        """
        Return every license record.

        Returns:
            List of LicenseRecord entities, newest first
        """
        pass

    @abstractmethod
    async def update_status(
        self, keys: Iterable[str], status: LicenseStatus
    ) -> int:
        """
        Set the status of the given license keys.

        Args:
            keys: License key strings
            status: New status

        Returns:
            Number of records updated
        """
        pass
