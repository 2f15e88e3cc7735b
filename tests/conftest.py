"""
Pytest configuration and shared fixtures.
"""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from core.domain.value_objects import LicenseStatus
from devices.domain.device_ban import DeviceBan
from devices.domain.services import DeviceBanRegistry
from devices.infrastructure.repositories.django_device_ban_repository import (
    DjangoDeviceBanRepository,
)
from devices.ports.device_ban_repository import DeviceBanRepository
from licenses.domain.config import LicensingConfig
from licenses.domain.license import LicenseRecord
from licenses.domain.license_key import LicenseKeyCodec
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.ports.license_repository import LicenseRepository

FIXED_NOW = datetime(2025, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

DEVICE_A = "abcdef1234567890abcdef1234567890"
DEVICE_B = "99887766554433221100ffeeddccbbaa"


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository backed by a dict, for domain tests."""

    def __init__(self):
        self.records: Dict[str, LicenseRecord] = {}

    async def bind(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        existing = self.records.get(record.key)
        if existing is not None:
            return existing, False
        self.records[record.key] = record
        return record, True

    async def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        # Yield so that concurrent activations interleave between lookup and bind.
        await asyncio.sleep(0)
        return self.records.get(key)

    async def find_by_device_prefix(self, device_id: str) -> List[LicenseRecord]:
        return list(self.records.values())

    async def find_all(self) -> List[LicenseRecord]:
        return sorted(self.records.values(), key=lambda r: r.created_at, reverse=True)

    async def update_status(self, keys: Iterable[str], status: LicenseStatus) -> int:
        updated = 0
        for key in keys:
            record = self.records.get(key)
            if record is not None:
                self.records[key] = replace(record, status=status)
                updated += 1
        return updated


class InMemoryDeviceBanRepository(DeviceBanRepository):
    """DeviceBanRepository backed by a list, for domain tests."""

    def __init__(self):
        self.entries: List[DeviceBan] = []

    async def add(self, ban: DeviceBan) -> bool:
        if any(entry.normalized == ban.normalized for entry in self.entries):
            return False
        self.entries.append(ban)
        return True

    async def find_all(self) -> List[DeviceBan]:
        return list(self.entries)

    async def remove(self, identifiers: Iterable[str]) -> int:
        wanted = {identifier.lower() for identifier in identifiers}
        before = len(self.entries)
        self.entries = [entry for entry in self.entries if entry.normalized not in wanted]
        return before - len(self.entries)


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def licensing_config():
    """Fixture for the default LicensingConfig."""
    return LicensingConfig()


@pytest.fixture
def codec(licensing_config):
    """Fixture for a LicenseKeyCodec built from the default config."""
    return LicenseKeyCodec(licensing_config.checksum_salt, licensing_config.tzinfo)


@pytest.fixture
def memory_license_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_device_ban_repository():
    """Fixture for an in-memory DeviceBanRepository."""
    return InMemoryDeviceBanRepository()


@pytest.fixture
def memory_ban_registry(memory_device_ban_repository):
    """Fixture for a DeviceBanRegistry over the in-memory repository."""
    return DeviceBanRegistry(memory_device_ban_repository)


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def device_ban_repository():
    """Fixture for DeviceBanRepository."""
    return DjangoDeviceBanRepository()


@pytest.fixture
def sample_record():
    """Fixture for a LicenseRecord bound to DEVICE_A."""
    return LicenseRecord.create(
        key="WEEK-ABCDEF12-20251231-0000",
        tier="WEEK",
        bound_device_id=DEVICE_A,
        expires_at=datetime(2025, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
        now=FIXED_NOW,
    )


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client):
    """Fixture for DRF API client carrying the test admin token."""
    api_client.credentials(HTTP_X_ADMIN_TOKEN="test-admin-token")
    return api_client
