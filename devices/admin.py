"""
Django admin configuration for devices app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin

from devices.application.commands.ban_device import BanDeviceCommand, UnbanDeviceCommand
from devices.application.handlers.device_ban_handlers import BanDeviceHandler, UnbanDeviceHandler
from devices.infrastructure.models import DeviceBan
from devices.infrastructure.repositories.django_device_ban_repository import (
    DjangoDeviceBanRepository,
)
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_device_ban_repo = DjangoDeviceBanRepository()
_license_repo = DjangoLicenseRepository()


@admin.register(DeviceBan)
class DeviceBanAdmin(admin.ModelAdmin):
    """
    Admin interface for DeviceBan model.

    Adding an entry here bans the device the same way the admin API does,
    including the licenses bound to it.
    """

    list_display = ["identifier", "created_at"]
    search_fields = ["identifier", "identifier_normalized"]
    ordering = ["-created_at"]
    fields = ["identifier"]

    def get_readonly_fields(self, request, obj=None):
        # Entries are never edited in place; delete and re-add instead.
        return ["identifier"] if obj else []

    def save_model(self, request, obj, form, change):
        if change:
            return
        result = async_to_sync(
            BanDeviceHandler(
                device_ban_repository=_device_ban_repo, license_repository=_license_repo
            ).handle
        )(BanDeviceCommand(device_id=obj.identifier))
        stored = DeviceBan.objects.filter(identifier_normalized=obj.identifier.lower()).first()
        if stored is not None:
            obj.pk = stored.pk
        self.message_user(request, result.message)

    def delete_model(self, request, obj):
        self._unban([obj.identifier])

    def delete_queryset(self, request, queryset):
        self._unban(queryset.values_list("identifier", flat=True))

    def _unban(self, identifiers):
        handle = async_to_sync(
            UnbanDeviceHandler(
                device_ban_repository=_device_ban_repo, license_repository=_license_repo
            ).handle
        )
        for identifier in list(identifiers):
            handle(UnbanDeviceCommand(device_id=identifier))
