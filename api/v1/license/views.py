"""
Client license API views.

These endpoints are used by the desktop client to:
- Activate (and re-verify) a license key on a device
- Check whether a license is active or banned
- Read the server clock
"""

from asgiref.sync import async_to_sync
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    ActivateLicenseResponseSerializer,
    CheckLicenseRequestSerializer,
    LicenseStatusResponseSerializer,
    ServerTimeResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from devices.domain.device_identity import display_prefix
from devices.infrastructure.repositories.django_device_ban_repository import (
    DjangoDeviceBanRepository,
)
from licenses.application.handlers.check_license_status_handler import CheckLicenseStatusHandler
from licenses.application.queries.check_license_status import CheckLicenseStatusQuery
from licenses.infrastructure.config import load_licensing_config
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_device_ban_repo = DjangoDeviceBanRepository()

tracer = get_tracer(__name__)


class ActivateLicenseView(APIView):
    """View for activating licenses."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Activate a license key on a device. The first successful activation "
            "locks the key to that device for good; later calls from the same "
            "device re-verify it."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={
            200: ActivateLicenseResponseSerializer,
            400: {"description": "Missing or unrecognized license key"},
            403: {"description": "Device banned, key for another device, or key already bound"},
            500: {"description": "License storage unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Activate a license key on a device."""
        return async_to_sync(self._handle_activate_license)(request)

    async def _handle_activate_license(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            serializer = ActivateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            span.set_attribute("license_key", data["license_key"])
            span.set_attribute("device_prefix", display_prefix(data["device_id"]))

            handler = ActivateLicenseHandler(
                config=load_licensing_config(),
                license_repository=_license_repo,
                device_ban_repository=_device_ban_repo,
            )

            try:
                result = await handler.handle(
                    ActivateLicenseCommand(
                        license_key=data["license_key"],
                        device_id=data["device_id"],
                    )
                )
            except Exception as e:
                span.set_status(Status(StatusCode.ERROR, type(e).__name__))
                raise

            span.set_attribute("outcome", result.outcome)
            span.set_status(Status(StatusCode.OK))

            response_serializer = ActivateLicenseResponseSerializer(result)
            return Response(response_serializer.data, status=status.HTTP_200_OK)


class CheckLicenseView(APIView):
    """View for checking license status."""

    @extend_schema(
        operation_id="check_license",
        summary="Check License Status",
        description=(
            "Report whether a license is active or banned. Keys that were never "
            "activated are reported active. Supplying the device identifier also "
            "checks the device against the ban registry."
        ),
        tags=["License API"],
        request=CheckLicenseRequestSerializer,
        responses={
            200: LicenseStatusResponseSerializer,
            400: {"description": "Missing license key"},
            500: {"description": "License storage unavailable"},
        },
    )
    def post(self, request: Request) -> Response:
        """Check license status."""
        return async_to_sync(self._handle_check_license)(request)

    async def _handle_check_license(self, request: Request) -> Response:
        """Async handler for check license."""
        with tracer.start_as_current_span("check_license") as span:
            serializer = CheckLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            span.set_attribute("license_key", data["license_key"])

            handler = CheckLicenseStatusHandler(
                license_repository=_license_repo,
                device_ban_repository=_device_ban_repo,
            )
            result = await handler.handle(
                CheckLicenseStatusQuery(
                    license_key=data["license_key"],
                    device_id=data.get("device_id") or None,
                )
            )

            span.set_attribute("status", result.status)
            span.set_attribute("reason", result.reason)

            response_serializer = LicenseStatusResponseSerializer(result)
            return Response(response_serializer.data, status=status.HTTP_200_OK)


class ServerTimeView(APIView):
    """View returning the server clock."""

    @extend_schema(
        operation_id="server_time",
        summary="Server Time",
        description="Current server time, for clients that validate expiry dates locally.",
        tags=["License API"],
        responses={200: ServerTimeResponseSerializer},
    )
    def get(self, request: Request) -> Response:
        """Return the current server time."""
        now = timezone.now()
        response_serializer = ServerTimeResponseSerializer(
            {"timestamp": int(now.timestamp() * 1000), "server_time": now}
        )
        return Response(response_serializer.data, status=status.HTTP_200_OK)
