"""
Device domain events.
"""

from dataclasses import dataclass, field
from typing import Tuple

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class DeviceBanned(DomainEvent):
    """Event raised when a device is added to the ban registry."""

    newly_added: bool
    affected_license_keys: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True, kw_only=True)
class DeviceUnbanned(DomainEvent):
    """Event raised when registry entries matching a device are removed."""

    removed_identifiers: Tuple[str, ...] = field(default_factory=tuple)
