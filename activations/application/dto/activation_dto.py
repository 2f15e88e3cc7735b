"""
Activation DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ActivateLicenseResponseDTO:
    """DTO for a successful activation or re-verification."""

    outcome: str
    tier: str
    expiry_date: datetime
    message: str
