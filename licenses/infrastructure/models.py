"""
LicenseRecord Django ORM model.

This is the infrastructure layer model for the license ledger.
Domain entities are in licenses.domain.license.
"""
import uuid

from django.db import models

from devices.domain.device_identity import display_prefix


class LicenseRecord(models.Model):
    """
    A license key bound to the device that first activated it.
    """

    STATUS_CHOICES = [
        ("active", "Active"),
        ("banned", "Banned"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    key = models.CharField(max_length=100, unique=True)
    owner_user_id = models.PositiveIntegerField(
        default=0, help_text="Owning user, 0 when no user is attached"
    )
    tier = models.CharField(max_length=50)
    bound_device_id = models.CharField(
        max_length=255, db_index=True, help_text="Full identifier of the bound device"
    )
    bound_device_prefix = models.CharField(
        max_length=8,
        db_index=True,
        editable=False,
        help_text="Uppercase display prefix of the bound device",
    )
    expires_at = models.DateTimeField()
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default="active", db_index=True
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField()

    class Meta:
        db_table = "license_records"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["bound_device_prefix", "status"], name="license_prefix_status_idx"
            ),
        ]

    def __str__(self):
        return f"{self.key} @ {self.bound_device_prefix}"

    def save(self, *args, **kwargs):
        """Keep the device prefix index in step with the bound device."""
        self.bound_device_prefix = display_prefix(self.bound_device_id)
        super().save(*args, **kwargs)
