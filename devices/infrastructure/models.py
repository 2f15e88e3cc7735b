"""
DeviceBan Django ORM model.
"""
import uuid

from django.db import models


class DeviceBan(models.Model):
    """
    A banned device identifier (full hash or 8-character display prefix).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    identifier = models.CharField(max_length=255, help_text="Identifier as entered")
    identifier_normalized = models.CharField(
        max_length=255,
        unique=True,
        editable=False,
        help_text="Lower-cased identifier; enforces case-insensitive uniqueness",
    )
    created_at = models.DateTimeField()

    class Meta:
        db_table = "device_bans"
        ordering = ["created_at"]

    def __str__(self):
        return self.identifier

    def save(self, *args, **kwargs):
        """Normalize identifier before saving."""
        self.identifier_normalized = self.identifier.lower()
        super().save(*args, **kwargs)
