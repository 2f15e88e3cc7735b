"""
ListLicensesHandler.

Handler for listing license records.
"""
from typing import List

from core.domain.exceptions import MalformedInputError
from core.domain.value_objects import LicenseStatus
from licenses.application.dto.license_dto import LicenseRecordDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.domain.services import Clock, utcnow
from licenses.ports.license_repository import LicenseRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository, clock: Clock = utcnow):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.clock = clock

    async def handle(self, query: ListLicensesQuery) -> List[LicenseRecordDTO]:
        """
        Handle list licenses query.

        Raises:
            MalformedInputError: If the status filter is not a known status
        """
        status = None
        if query.status:
            try:
                status = LicenseStatus(query.status.lower())
            except ValueError:
                raise MalformedInputError(f"Unknown status: {query.status}") from None

        now = self.clock()
        records = await self.license_repository.find_all()
        return [
            LicenseRecordDTO.from_record(record, now)
            for record in records
            if status is None or record.status == status
        ]
