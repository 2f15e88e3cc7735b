"""
ListBannedDevicesQuery.
"""
from dataclasses import dataclass


@dataclass
class ListBannedDevicesQuery:
    """Query to list every banned device identifier."""
