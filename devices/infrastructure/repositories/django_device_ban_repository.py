"""
Django implementation of the DeviceBanRepository port.
"""
from typing import Iterable, List

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.infrastructure.database import storage_guard
from devices.domain.device_ban import DeviceBan
from devices.infrastructure.models import DeviceBan as DeviceBanModel
from devices.ports.device_ban_repository import DeviceBanRepository


class DjangoDeviceBanRepository(DeviceBanRepository):
    """
    Django ORM implementation of DeviceBanRepository.

    Case-insensitive uniqueness is enforced by the unique
    ``identifier_normalized`` column, so concurrent bans of the same
    identifier store one entry.
    """

    def _to_domain(self, model: DeviceBanModel) -> DeviceBan:
        """
        Convert Django model to domain entity.

        Args:
            model: Django DeviceBan model

        Returns:
            DeviceBan domain entity
        """
        return DeviceBan(
            id=model.id,
            identifier=model.identifier,
            created_at=model.created_at,
        )

    @sync_to_async
    @storage_guard
    def add(self, ban: DeviceBan) -> bool:
        """
        Add an entry unless a case-insensitive duplicate exists.

        Returns:
            True if the entry was added
        """
        try:
            with transaction.atomic():
                _, created = DeviceBanModel.objects.get_or_create(
                    identifier_normalized=ban.normalized,
                    defaults={
                        "id": ban.id,
                        "identifier": ban.identifier,
                        "created_at": ban.created_at,
                    },
                )
        except IntegrityError:
            return False
        return created

    @sync_to_async
    @storage_guard
    def find_all(self) -> List[DeviceBan]:
        """
        Return every ban entry in the order they were added.
        """
        return [self._to_domain(model) for model in DeviceBanModel.objects.all()]

    @sync_to_async
    @storage_guard
    def remove(self, identifiers: Iterable[str]) -> int:
        """
        Remove entries by identifier (case-insensitive).

        Returns:
            Number of entries removed
        """
        normalized = [identifier.lower() for identifier in identifiers]
        deleted, _ = DeviceBanModel.objects.filter(identifier_normalized__in=normalized).delete()
        return deleted
