"""
Admin token authentication middleware.

This middleware validates the admin API token for administrative APIs.
Client license APIs are open.
"""

import logging
import secrets
from typing import Optional

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

ADMIN_API_PREFIX = "/api/v1/admin/"


class AdminTokenAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for admin token authentication.

    This middleware:
    1. Validates X-Admin-Token (or a Bearer token) for admin APIs (/api/v1/admin/*)
    2. Returns 401 Unauthorized if authentication fails
    3. Returns 503 if no admin tokens are configured
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Process request and validate authentication.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if authentication fails, None otherwise
        """
        if not request.path.startswith(ADMIN_API_PREFIX):
            return None
        return self._authenticate_admin_api(request)

    def _authenticate_admin_api(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate admin API request.

        Args:
            request: HTTP request

        Returns:
            HttpResponse with 401 if auth fails, None if successful
        """
        configured = [token for token in getattr(settings, "ADMIN_API_TOKENS", []) if token]
        if not configured:
            logger.error("Admin API called but ADMIN_API_TOKENS is empty")
            return JsonResponse(
                {"error": {"code": "ADMIN_API_DISABLED", "message": "Admin API is not configured"}},
                status=503,
            )

        token = request.headers.get("X-Admin-Token") or request.headers.get(
            "Authorization", ""
        ).replace("Bearer ", "")

        if not token:
            return JsonResponse(
                {
                    "error": {
                        "code": "MISSING_ADMIN_TOKEN",
                        "message": "Missing admin token. Provide X-Admin-Token header.",
                    }
                },
                status=401,
            )

        if not any(secrets.compare_digest(token, expected) for expected in configured):
            logger.warning("Invalid admin token attempted: %s...", token[:4])
            return JsonResponse(
                {"error": {"code": "INVALID_ADMIN_TOKEN", "message": "Invalid admin token"}},
                status=401,
            )

        request.is_admin = True  # type: ignore
        return None
