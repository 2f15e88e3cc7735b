"""
BanDeviceCommand and UnbanDeviceCommand.
"""
from dataclasses import dataclass


@dataclass
class BanDeviceCommand:
    """Command to ban a device (full hash or display prefix)."""

    device_id: str


@dataclass
class UnbanDeviceCommand:
    """Command to remove matching device bans."""

    device_id: str
