"""
Device DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import List


@dataclass
class DeviceBanDTO:
    """DTO for a ban registry entry."""

    id: uuid.UUID
    device_prefix: str
    created_at: datetime


@dataclass
class BanDeviceResponseDTO:
    """DTO for ban device response."""

    device_prefix: str
    newly_added: bool
    banned_license_keys: List[str]

    @property
    def message(self) -> str:
        """Summary for the admin dashboard."""
        return (
            f"Device banned: {self.device_prefix} | "
            f"Also banned {len(self.banned_license_keys)} license(s)"
        )


@dataclass
class UnbanDeviceResponseDTO:
    """DTO for unban device response."""

    device_prefix: str
    removed: int

    @property
    def message(self) -> str:
        """Summary for the admin dashboard."""
        return f"Device unbanned: {self.device_prefix}"
