"""
Activation outcome types.

Every activation attempt ends in exactly one outcome; only the two
ALLOW outcomes carry a tier and expiry.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from licenses.domain.license import LicenseRecord


class ActivationOutcome(Enum):
    """Decision taken for a (license key, device) pair."""

    ALLOW_NEW = "allow_new"
    ALLOW_REVERIFY = "allow_reverify"
    REJECT_DEVICE_BANNED = "reject_device_banned"
    REJECT_DEVICE_MISMATCH = "reject_device_mismatch"
    REJECT_OTHER_DEVICE = "reject_other_device"
    ERROR_MALFORMED = "error_malformed"

    def __str__(self) -> str:
        """Return outcome as string."""
        return self.value

    @property
    def allowed(self) -> bool:
        """Whether the client receives access."""
        return self in (ActivationOutcome.ALLOW_NEW, ActivationOutcome.ALLOW_REVERIFY)


@dataclass(frozen=True)
class ActivationResult:
    """
    Result of an activation attempt.

    ``record`` is the ledger entry the decision was based on, if any.
    """

    outcome: ActivationOutcome
    tier: Optional[str] = None
    expires_at: Optional[datetime] = None
    record: Optional[LicenseRecord] = None
    detail: Optional[str] = None

    @property
    def allowed(self) -> bool:
        """Whether the client receives access."""
        return self.outcome.allowed

    @classmethod
    def allow(cls, outcome: ActivationOutcome, record: LicenseRecord) -> "ActivationResult":
        """Build an ALLOW result from the bound record."""
        return cls(
            outcome=outcome,
            tier=record.tier,
            expires_at=record.expires_at,
            record=record,
        )

    @classmethod
    def reject(
        cls,
        outcome: ActivationOutcome,
        detail: Optional[str] = None,
        record: Optional[LicenseRecord] = None,
    ) -> "ActivationResult":
        """Build a rejection result."""
        return cls(outcome=outcome, record=record, detail=detail)
