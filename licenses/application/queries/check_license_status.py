"""
CheckLicenseStatusQuery.

Query to check whether a license is active or banned.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CheckLicenseStatusQuery:
    """Query to check license status for a license key."""

    license_key: str
    device_id: Optional[str] = None
