"""
Activation domain events.

Domain events represent something that happened in the activation domain.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class LicenseActivated(DomainEvent):
    """Event raised when a key is bound to a device for the first time."""

    device_prefix: str
    tier: str
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class LicenseReverified(DomainEvent):
    """Event raised when the bound device activates its key again."""

    device_prefix: str


@dataclass(frozen=True, kw_only=True)
class ActivationRejected(DomainEvent):
    """Event raised when an activation attempt is refused."""

    outcome: str
    device_prefix: Optional[str] = None
