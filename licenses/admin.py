"""
Django admin configuration for licenses app.
"""
from asgiref.sync import async_to_sync
from django.contrib import admin
from django.utils.html import format_html

from licenses.application.commands.ban_license import BanLicenseCommand, UnbanLicenseCommand
from licenses.application.handlers.license_lifecycle_handlers import (
    BanLicenseHandler,
    UnbanLicenseHandler,
)
from licenses.infrastructure.models import LicenseRecord
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()


@admin.register(LicenseRecord)
class LicenseRecordAdmin(admin.ModelAdmin):
    """Admin interface for LicenseRecord model."""

    list_display = [
        "key",
        "tier",
        "bound_device_prefix",
        "status_badge",
        "expires_at",
        "created_at",
    ]
    list_filter = ["status", "tier", "created_at", "expires_at"]
    search_fields = ["key", "bound_device_prefix"]
    readonly_fields = [
        "id",
        "key",
        "bound_device_id",
        "bound_device_prefix",
        "created_at",
        "updated_at",
    ]
    actions = ["ban_licenses", "unban_licenses"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "key", "tier", "owner_user_id", "status", "expires_at"),
            },
        ),
        (
            "Device Binding",
            {
                "fields": ("bound_device_id", "bound_device_prefix"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        """Records are created by activation only."""
        return False

    def status_badge(self, obj):
        """Display status with color badge."""
        colors = {"active": "green", "banned": "red"}
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.status, "gray"),
            obj.get_status_display(),
        )

    status_badge.short_description = "Status"

    @admin.action(description="Ban selected licenses")
    def ban_licenses(self, request, queryset):
        """Ban selected licenses through the lifecycle handler so events are published."""
        handle = async_to_sync(BanLicenseHandler(license_repository=_license_repo).handle)
        keys = list(queryset.values_list("key", flat=True))
        for key in keys:
            handle(BanLicenseCommand(license_key=key))
        self.message_user(request, f"{len(keys)} license(s) banned.")

    @admin.action(description="Unban selected licenses")
    def unban_licenses(self, request, queryset):
        """Restore selected licenses to active."""
        handle = async_to_sync(UnbanLicenseHandler(license_repository=_license_repo).handle)
        keys = list(queryset.values_list("key", flat=True))
        for key in keys:
            handle(UnbanLicenseCommand(license_key=key))
        self.message_user(request, f"{len(keys)} license(s) unbanned.")
