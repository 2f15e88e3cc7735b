"""
LicenseRecord domain entity.

A license record is created when a key is first activated and binds that
key to one device for good. It contains business logic and is
independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import LicenseStatus
from devices.domain.device_identity import device_ids_match, display_prefix


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class LicenseRecord:
    """
    LicenseRecord domain entity.

    Represents a license key bound to a device. The bound device never
    changes once set; only the status moves between active and banned.
    """

    id: uuid.UUID
    key: str
    owner_user_id: int
    tier: str
    bound_device_id: str
    expires_at: datetime
    status: LicenseStatus
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license record."""
        if not self.key or len(self.key.strip()) == 0:
            raise ValueError("License key cannot be empty")
        if len(self.key) > 100:
            raise ValueError("License key too long")
        if not self.bound_device_id or len(self.bound_device_id.strip()) == 0:
            raise ValueError("Bound device cannot be empty")
        if len(self.bound_device_id) > 255:
            raise ValueError("Bound device identifier too long")
        if self.owner_user_id < 0:
            raise ValueError("Owner user ID cannot be negative")

    @classmethod
    def create(
        cls,
        key: str,
        tier: str,
        bound_device_id: str,
        expires_at: datetime,
        owner_user_id: int = 0,
        now: Optional[datetime] = None,
        record_id: Optional[uuid.UUID] = None,
    ) -> "LicenseRecord":
        """
        Create a new, active LicenseRecord.

        Args:
            key: License key string
            tier: Tier code taken from the key
            bound_device_id: Full identifier of the activating device
            expires_at: Expiry of the license
            owner_user_id: Owning user, 0 when no user is attached
            now: Creation time (defaults to utcnow)
            record_id: Optional UUID (generated if not provided)

        Returns:
            LicenseRecord entity instance
        """
        now = now or _utcnow()
        return cls(
            id=record_id or uuid.uuid4(),
            key=key,
            owner_user_id=owner_user_id,
            tier=tier,
            bound_device_id=bound_device_id,
            expires_at=expires_at,
            status=LicenseStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @property
    def bound_device_prefix(self) -> str:
        """Display prefix of the bound device."""
        return display_prefix(self.bound_device_id)

    @property
    def is_banned(self) -> bool:
        """Whether the license has been banned."""
        return self.status == LicenseStatus.BANNED

    def is_bound_to(self, device_id: str) -> bool:
        """Exact check used for re-verification from the same device."""
        return self.bound_device_id == device_id

    def is_bound_to_device_matching(self, device_id: str) -> bool:
        """Prefix-tolerant check used when propagating a device ban."""
        return device_ids_match(device_id, self.bound_device_id)

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if the license is past its expiry.

        Args:
            current_time: Current time (defaults to utcnow)
        """
        return self.expires_at < (current_time or _utcnow())

    def ban(self) -> "LicenseRecord":
        """Return a copy with banned status."""
        return replace(self, status=LicenseStatus.BANNED, updated_at=_utcnow())

    def unban(self) -> "LicenseRecord":
        """Return a copy with active status, whatever the current status is."""
        return replace(self, status=LicenseStatus.ACTIVE, updated_at=_utcnow())
