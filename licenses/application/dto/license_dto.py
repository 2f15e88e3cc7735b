"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from devices.domain.device_identity import display_prefix
from licenses.domain.license import LicenseRecord


@dataclass
class LicenseRecordDTO:
    """DTO for a license ledger entry."""

    id: uuid.UUID
    license_key: str
    tier: str
    device_prefix: str
    status: str
    expires_at: datetime
    is_expired: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: LicenseRecord, now: Optional[datetime] = None) -> "LicenseRecordDTO":
        """Build a DTO from a ledger entry; the full device id is never exposed."""
        return cls(
            id=record.id,
            license_key=record.key,
            tier=record.tier,
            device_prefix=display_prefix(record.bound_device_id),
            status=record.status.value,
            expires_at=record.expires_at,
            is_expired=record.is_expired(now),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


@dataclass
class LicenseStatusDTO:
    """DTO for license status response."""

    license_key: str
    status: str
    reason: str
    message: str


@dataclass
class IssuedLicenseKeyDTO:
    """DTO for a generated license key."""

    license_key: str
    tier: str
    tier_code: str
    expiry_date: Optional[datetime]
