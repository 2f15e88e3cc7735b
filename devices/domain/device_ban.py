"""
DeviceBan domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class DeviceBan:
    """
    A banned device identifier, either a full hash or a display prefix.
    """

    id: uuid.UUID
    identifier: str
    created_at: datetime

    def __post_init__(self):
        """Validate ban entry."""
        if not self.identifier or len(self.identifier.strip()) == 0:
            raise ValueError("Device identifier cannot be empty")
        if len(self.identifier) > 255:
            raise ValueError("Device identifier too long")

    @classmethod
    def create(
        cls,
        identifier: str,
        ban_id: Optional[uuid.UUID] = None,
    ) -> "DeviceBan":
        """
        Create a new DeviceBan entry.

        Args:
            identifier: Device identifier as entered by the administrator
            ban_id: Optional UUID (generated if not provided)

        Returns:
            DeviceBan entity instance
        """
        return cls(
            id=ban_id or uuid.uuid4(),
            identifier=identifier,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def normalized(self) -> str:
        """Case-folded identifier used for duplicate detection."""
        return self.identifier.lower()
