"""
ListLicensesQuery.

Query to list license records for the admin dashboard.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ListLicensesQuery:
    """Query to list license records, optionally filtered by status."""

    status: Optional[str] = None
