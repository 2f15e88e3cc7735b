"""
ActivateLicenseCommand.

Command to activate (or re-verify) a license key on a device.
"""

from dataclasses import dataclass


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license key on a device."""

    license_key: str
    device_id: str
