"""
BanLicenseCommand and UnbanLicenseCommand.

Administrative commands that change the status of a single license.
"""
from dataclasses import dataclass


@dataclass
class BanLicenseCommand:
    """Command to ban a license."""

    license_key: str


@dataclass
class UnbanLicenseCommand:
    """Command to restore a banned license to active."""

    license_key: str
