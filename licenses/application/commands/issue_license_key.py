"""
IssueLicenseKeyCommand.

Command to generate a license key for a device.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class IssueLicenseKeyCommand:
    """
    Command to generate a license key.

    With ``expiry_date`` set, the key embeds that date; otherwise the plan
    duration counted from now is used.
    """

    device_id: str
    tier: str
    expiry_date: Optional[date] = None
