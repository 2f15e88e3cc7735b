"""
Serializers for client license API endpoints.
"""

from collections.abc import Mapping

from rest_framework import serializers

CLIENT_FIELD_ALIASES = {
    "licenseKey": "license_key",
    "deviceId": "device_id",
}


class ClientFieldAliasMixin:
    """Accept the desktop client's camelCase field names alongside snake_case."""

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = data.copy()
            for alias, field_name in CLIENT_FIELD_ALIASES.items():
                if alias in data and field_name not in data:
                    data[field_name] = data[alias]
        return super().to_internal_value(data)


class ActivateLicenseRequestSerializer(ClientFieldAliasMixin, serializers.Serializer):
    """Serializer for activate license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    device_id = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class ActivateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for activate license response."""

    outcome = serializers.CharField()
    tier = serializers.CharField()
    expiry_date = serializers.DateTimeField()
    message = serializers.CharField()


class CheckLicenseRequestSerializer(ClientFieldAliasMixin, serializers.Serializer):
    """Serializer for check license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    device_id = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, default=None, max_length=255
    )


class LicenseStatusResponseSerializer(serializers.Serializer):
    """Serializer for license status response."""

    license_key = serializers.CharField()
    status = serializers.CharField()
    reason = serializers.CharField()
    message = serializers.CharField()


class ServerTimeResponseSerializer(serializers.Serializer):
    """Serializer for server time response."""

    timestamp = serializers.IntegerField(help_text="Milliseconds since the Unix epoch")
    server_time = serializers.DateTimeField()
