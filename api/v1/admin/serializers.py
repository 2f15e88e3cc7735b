"""
Serializers for admin API endpoints.
"""

from rest_framework import serializers


class IssueLicenseKeyRequestSerializer(serializers.Serializer):
    """Serializer for issue license key request."""

    device_id = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    tier = serializers.CharField(required=True, max_length=20)
    expiry_date = serializers.DateField(
        required=False,
        allow_null=True,
        default=None,
        help_text="Embed this date instead of the plan duration",
    )


class IssuedLicenseKeyResponseSerializer(serializers.Serializer):
    """Serializer for issued license key response."""

    license_key = serializers.CharField()
    tier = serializers.CharField()
    tier_code = serializers.CharField()
    expiry_date = serializers.DateTimeField(allow_null=True)


class LicenseKeyRequestSerializer(serializers.Serializer):
    """Serializer for ban/unban license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)


class LicenseRecordSerializer(serializers.Serializer):
    """Serializer for a license ledger entry."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    tier = serializers.CharField()
    device_prefix = serializers.CharField()
    status = serializers.CharField()
    expires_at = serializers.DateTimeField()
    is_expired = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for license list response."""

    count = serializers.IntegerField()
    licenses = LicenseRecordSerializer(many=True)


class LicenseStatusChangeResponseSerializer(serializers.Serializer):
    """Serializer for ban/unban license response."""

    license_key = serializers.CharField()
    status = serializers.CharField()
    message = serializers.CharField()


class DeviceRequestSerializer(serializers.Serializer):
    """Serializer for ban/unban device request."""

    device_id = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)


class BanDeviceResponseSerializer(serializers.Serializer):
    """Serializer for ban device response."""

    device_prefix = serializers.CharField()
    newly_added = serializers.BooleanField()
    banned_license_keys = serializers.ListField(child=serializers.CharField())
    message = serializers.CharField()


class UnbanDeviceResponseSerializer(serializers.Serializer):
    """Serializer for unban device response."""

    device_prefix = serializers.CharField()
    removed = serializers.IntegerField()
    message = serializers.CharField()


class DeviceBanSerializer(serializers.Serializer):
    """Serializer for a ban registry entry."""

    id = serializers.UUIDField()
    device_prefix = serializers.CharField()
    created_at = serializers.DateTimeField()


class BannedDeviceListResponseSerializer(serializers.Serializer):
    """Serializer for banned device list response."""

    count = serializers.IntegerField()
    devices = DeviceBanSerializer(many=True)
