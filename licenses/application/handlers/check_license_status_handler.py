"""
CheckLicenseStatusHandler.

Handler for the read-only license status check.
"""
from devices.domain.services import DeviceBanRegistry
from devices.ports.device_ban_repository import DeviceBanRepository
from licenses.application.dto.license_dto import LicenseStatusDTO
from licenses.application.queries.check_license_status import CheckLicenseStatusQuery
from licenses.domain.services import LicenseStatusChecker
from licenses.ports.license_repository import LicenseRepository


class CheckLicenseStatusHandler:
    """Handler for CheckLicenseStatusQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        device_ban_repository: DeviceBanRepository,
    ):
        """Initialize handler with repositories."""
        self.checker = LicenseStatusChecker(
            license_repository, DeviceBanRegistry(device_ban_repository)
        )

    async def handle(self, query: CheckLicenseStatusQuery) -> LicenseStatusDTO:
        """
        Handle check license status query.

        Args:
            query: CheckLicenseStatusQuery

        Returns:
            LicenseStatusDTO with status, reason and message

        Raises:
            MalformedInputError: If the key is missing
        """
        check = await self.checker.check(query.license_key, query.device_id)
        return LicenseStatusDTO(
            license_key=query.license_key,
            status=check.status.value,
            reason=check.reason.value,
            message=check.message,
        )
