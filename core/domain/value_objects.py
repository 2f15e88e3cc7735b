"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from enum import Enum


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    BANNED = "banned"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class StatusReason(Enum):
    """Why a validity check reported the status it did."""

    ACTIVE = "active"
    NOT_ACTIVATED = "not_activated"
    DEVICE_BANNED = "device_banned"
    LICENSE_BANNED = "license_banned"
    BOUND_DEVICE_BANNED = "bound_device_banned"

    def __str__(self) -> str:
        """Return reason as string."""
        return self.value
