"""
Admin API views.

These endpoints are used by the admin dashboard to:
- Generate license keys
- List license records
- Ban and unban licenses
- Ban and unban devices, cascading device bans onto bound licenses

All endpoints require a valid X-Admin-Token header.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import (
    BanDeviceResponseSerializer,
    BannedDeviceListResponseSerializer,
    DeviceRequestSerializer,
    IssuedLicenseKeyResponseSerializer,
    IssueLicenseKeyRequestSerializer,
    LicenseKeyRequestSerializer,
    LicenseListResponseSerializer,
    LicenseStatusChangeResponseSerializer,
    UnbanDeviceResponseSerializer,
)
from core.instrumentation import get_tracer
from devices.application.commands.ban_device import BanDeviceCommand, UnbanDeviceCommand
from devices.application.handlers.device_ban_handlers import (
    BanDeviceHandler,
    ListBannedDevicesHandler,
    UnbanDeviceHandler,
)
from devices.application.queries.list_banned_devices import ListBannedDevicesQuery
from devices.infrastructure.repositories.django_device_ban_repository import (
    DjangoDeviceBanRepository,
)
from licenses.application.commands.ban_license import BanLicenseCommand, UnbanLicenseCommand
from licenses.application.commands.issue_license_key import IssueLicenseKeyCommand
from licenses.application.handlers.issue_license_key_handler import IssueLicenseKeyHandler
from licenses.application.handlers.license_lifecycle_handlers import (
    BanLicenseHandler,
    UnbanLicenseHandler,
)
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.config import load_licensing_config
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_device_ban_repo = DjangoDeviceBanRepository()

tracer = get_tracer(__name__)

ADMIN_TOKEN_PARAMETER = OpenApiParameter(
    name="X-Admin-Token",
    type=str,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Administrative API token",
)


class IssueLicenseKeyView(APIView):
    """View for generating license keys."""

    @extend_schema(
        operation_id="issue_license_key",
        summary="Issue License Key",
        description=(
            "Generate a license key for a device and plan. The key expires after "
            "the plan duration unless an explicit expiry_date is given. Nothing is "
            "stored until the key is activated."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=IssueLicenseKeyRequestSerializer,
        responses={
            201: IssuedLicenseKeyResponseSerializer,
            400: {"description": "Missing device or unknown plan"},
            401: {"description": "Missing or invalid admin token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Generate a license key."""
        return async_to_sync(self._handle_issue)(request)

    async def _handle_issue(self, request: Request) -> Response:
        """Async handler for issue license key."""
        with tracer.start_as_current_span("issue_license_key") as span:
            serializer = IssueLicenseKeyRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data
            span.set_attribute("tier", data["tier"])

            handler = IssueLicenseKeyHandler(config=load_licensing_config())
            result = await handler.handle(
                IssueLicenseKeyCommand(
                    device_id=data["device_id"],
                    tier=data["tier"],
                    expiry_date=data.get("expiry_date"),
                )
            )

            response_serializer = IssuedLicenseKeyResponseSerializer(result)
            return Response(response_serializer.data, status=status.HTTP_201_CREATED)


class ListLicensesView(APIView):
    """View for listing license records."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="List every activated license, newest first.",
        tags=["Admin API"],
        parameters=[
            ADMIN_TOKEN_PARAMETER,
            OpenApiParameter(
                name="status",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                enum=["active", "banned"],
                description="Only return licenses with this status",
            ),
        ],
        responses={
            200: LicenseListResponseSerializer,
            400: {"description": "Unknown status filter"},
            401: {"description": "Missing or invalid admin token"},
        },
    )
    def get(self, request: Request) -> Response:
        """List license records."""
        handler = ListLicensesHandler(license_repository=_license_repo)
        licenses = async_to_sync(handler.handle)(
            ListLicensesQuery(status=request.query_params.get("status"))
        )
        response_serializer = LicenseListResponseSerializer(
            {"count": len(licenses), "licenses": licenses}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class BanLicenseView(APIView):
    """View for banning a license."""

    @extend_schema(
        operation_id="ban_license",
        summary="Ban License",
        description="Ban a single activated license.",
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=LicenseKeyRequestSerializer,
        responses={
            200: LicenseStatusChangeResponseSerializer,
            400: {"description": "Missing license key"},
            401: {"description": "Missing or invalid admin token"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Ban a license."""
        serializer = LicenseKeyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = BanLicenseHandler(license_repository=_license_repo)
        record = async_to_sync(handler.handle)(
            BanLicenseCommand(license_key=serializer.validated_data["license_key"])
        )

        response_serializer = LicenseStatusChangeResponseSerializer(
            {
                "license_key": record.key,
                "status": record.status.value,
                "message": "License banned successfully",
            }
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class UnbanLicenseView(APIView):
    """View for unbanning a license."""

    @extend_schema(
        operation_id="unban_license",
        summary="Unban License",
        description=(
            "Restore a license to active. This also lifts bans applied by a "
            "device ban; the device itself stays banned."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=LicenseKeyRequestSerializer,
        responses={
            200: LicenseStatusChangeResponseSerializer,
            400: {"description": "Missing license key"},
            401: {"description": "Missing or invalid admin token"},
            404: {"description": "License key not found"},
        },
    )
    def post(self, request: Request) -> Response:
        """Unban a license."""
        serializer = LicenseKeyRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = UnbanLicenseHandler(license_repository=_license_repo)
        record = async_to_sync(handler.handle)(
            UnbanLicenseCommand(license_key=serializer.validated_data["license_key"])
        )

        response_serializer = LicenseStatusChangeResponseSerializer(
            {
                "license_key": record.key,
                "status": record.status.value,
                "message": "License unbanned successfully",
            }
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class BanDeviceView(APIView):
    """View for banning a device."""

    @extend_schema(
        operation_id="ban_device",
        summary="Ban Device",
        description=(
            "Ban a device by full hash or display prefix. Every license bound to "
            "a matching device is banned as well."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=DeviceRequestSerializer,
        responses={
            200: BanDeviceResponseSerializer,
            400: {"description": "Missing device identifier"},
            401: {"description": "Missing or invalid admin token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Ban a device."""
        return async_to_sync(self._handle_ban_device)(request)

    async def _handle_ban_device(self, request: Request) -> Response:
        """Async handler for ban device."""
        with tracer.start_as_current_span("ban_device") as span:
            serializer = DeviceRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = BanDeviceHandler(
                device_ban_repository=_device_ban_repo,
                license_repository=_license_repo,
            )
            result = await handler.handle(
                BanDeviceCommand(device_id=serializer.validated_data["device_id"])
            )
            span.set_attribute("device_prefix", result.device_prefix)
            span.set_attribute("licenses_banned", len(result.banned_license_keys))

            response_serializer = BanDeviceResponseSerializer(result)
            return Response(response_serializer.data, status=status.HTTP_200_OK)


class UnbanDeviceView(APIView):
    """View for unbanning a device."""

    @extend_schema(
        operation_id="unban_device",
        summary="Unban Device",
        description=(
            "Remove every ban entry matching the device. Licenses banned along "
            "with the device stay banned until unbanned individually."
        ),
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        request=DeviceRequestSerializer,
        responses={
            200: UnbanDeviceResponseSerializer,
            400: {"description": "Missing device identifier"},
            401: {"description": "Missing or invalid admin token"},
        },
    )
    def post(self, request: Request) -> Response:
        """Unban a device."""
        serializer = DeviceRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        handler = UnbanDeviceHandler(
            device_ban_repository=_device_ban_repo,
            license_repository=_license_repo,
        )
        result = async_to_sync(handler.handle)(
            UnbanDeviceCommand(device_id=serializer.validated_data["device_id"])
        )

        response_serializer = UnbanDeviceResponseSerializer(result)
        return Response(response_serializer.data, status=status.HTTP_200_OK)


class ListBannedDevicesView(APIView):
    """View for listing banned devices."""

    @extend_schema(
        operation_id="list_banned_devices",
        summary="List Banned Devices",
        description="List every entry in the device ban registry.",
        tags=["Admin API"],
        parameters=[ADMIN_TOKEN_PARAMETER],
        responses={
            200: BannedDeviceListResponseSerializer,
            401: {"description": "Missing or invalid admin token"},
        },
    )
    def get(self, request: Request) -> Response:
        """List banned devices."""
        handler = ListBannedDevicesHandler(device_ban_repository=_device_ban_repo)
        devices = async_to_sync(handler.handle)(ListBannedDevicesQuery())
        response_serializer = BannedDeviceListResponseSerializer(
            {"count": len(devices), "devices": devices}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)
