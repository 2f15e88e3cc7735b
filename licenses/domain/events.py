"""
License domain events.

Domain events represent something that happened in the license domain.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseKeyIssued(DomainEvent):
    """Event raised when a license key is generated for a purchase."""

    tier: str
    device_prefix: str
    expires_at: Optional[datetime] = None


@dataclass(frozen=True, kw_only=True)
class LicenseBanned(DomainEvent):
    """Event raised when a license is banned by an administrator."""

    source: str = field(default="admin")


@dataclass(frozen=True, kw_only=True)
class LicenseUnbanned(DomainEvent):
    """Event raised when a license is restored to active."""
