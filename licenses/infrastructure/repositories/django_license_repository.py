"""
Django implementation of the LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from typing import Iterable, List, Optional, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from core.domain.value_objects import LicenseStatus
from core.infrastructure.database import storage_guard
from devices.domain.device_identity import DISPLAY_PREFIX_LENGTH
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.models import LicenseRecord as LicenseRecordModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django model fields
    3. Relies on the unique key constraint for insert-if-absent binding
    """

    def _to_domain(self, model: LicenseRecordModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseRecord model

        Returns:
            LicenseRecord domain entity
        """
        return LicenseRecord(
            id=model.id,
            key=model.key,
            owner_user_id=model.owner_user_id,
            tier=model.tier,
            bound_device_id=model.bound_device_id,
            expires_at=model.expires_at,
            status=LicenseStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_fields(self, record: LicenseRecord) -> dict:
        """Model field values for a domain entity (excluding the key)."""
        return {
            "id": record.id,
            "owner_user_id": record.owner_user_id,
            "tier": record.tier,
            "bound_device_id": record.bound_device_id,
            "expires_at": record.expires_at,
            "status": record.status.value,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
        }

    @sync_to_async
    @storage_guard
    def bind(self, record: LicenseRecord) -> Tuple[LicenseRecord, bool]:
        """
        Insert a record unless one already exists for its key.

        Returns:
            Tuple of (stored record, created)
        """
        try:
            with transaction.atomic():
                model, created = LicenseRecordModel.objects.get_or_create(
                    key=record.key, defaults=self._to_fields(record)
                )
        except IntegrityError:
            # Lost the race to a concurrent insert of the same key.
            model, created = LicenseRecordModel.objects.get(key=record.key), False
        return self._to_domain(model), created

    @sync_to_async
    @storage_guard
    def find_by_key(self, key: str) -> Optional[LicenseRecord]:
        """
        Find a license record by key string.

        Args:
            key: License key string

        Returns:
            LicenseRecord entity or None if not found
        """
        model = LicenseRecordModel.objects.filter(key=key).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    @storage_guard
    def find_by_device_prefix(self, device_id: str) -> List[LicenseRecord]:
        """
        Find records whose bound device could match a device identifier.

        Covers bound devices that start with the identifier's display
        prefix and bound devices shorter than a display prefix that the
        identifier starts with.
        """
        prefix = device_id[:DISPLAY_PREFIX_LENGTH].upper()
        shorter = [prefix[:length] for length in range(1, len(prefix) + 1)]
        models = LicenseRecordModel.objects.filter(
            Q(bound_device_prefix__startswith=prefix) | Q(bound_device_prefix__in=shorter)
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    @storage_guard
    def find_all(self) -> List[LicenseRecord]:
        """
        Return every license record, newest first.
        """
        return [self._to_domain(model) for model in LicenseRecordModel.objects.all()]

    @sync_to_async
    @storage_guard
    def update_status(self, keys: Iterable[str], status: LicenseStatus) -> int:
        """
        Set the status of the given license keys in one statement.

        Args:
            keys: License key strings
            status: New status

        Returns:
            Number of records updated
        """
        return LicenseRecordModel.objects.filter(key__in=list(keys)).update(
            status=status.value, updated_at=timezone.now()
        )
