"""
License key codec.

Keys have the form ``TIER-HASHPREFIX[-YYYYMMDD]-CHECKSUM``: a tier code,
the uppercase display prefix of the target device (or the ``ADMIN``
wildcard), an optional expiry date and a four character base-36 checksum.
The checksum is a rolling 32-bit polynomial hash over the first three
fields and a secret salt. It deters hand-crafted keys, it is not a MAC.
"""

import re
import string
from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo
from typing import Optional, Union

from core.domain.exceptions import InvalidLicenseKeyError, MalformedInputError
from devices.domain.device_identity import display_prefix

SEGMENT_SEPARATOR = "-"
CHECKSUM_LENGTH = 4
EXPIRY_PATTERN = re.compile(r"^\d{8}$")
_BASE36_DIGITS = string.digits + string.ascii_uppercase


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def rolling_hash(text: str) -> int:
    """
    Signed 32-bit polynomial hash (``h = h * 31 + c`` per character).

    Args:
        text: Input string

    Returns:
        Hash in the signed 32-bit range
    """
    accumulator = 0
    for char in text:
        accumulator = _to_int32((accumulator << 5) - accumulator + ord(char))
    return accumulator


def to_base36(number: int) -> str:
    """Render a non-negative integer in uppercase base-36."""
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def format_expiry(expiry: Union[date, datetime], zone: Optional[tzinfo] = None) -> str:
    """
    Format an expiry as ``YYYYMMDD`` in the local calendar.

    Aware datetimes are converted to ``zone`` first; naive datetimes and
    plain dates are taken as already local.
    """
    if isinstance(expiry, datetime):
        if expiry.tzinfo is not None and zone is not None:
            expiry = expiry.astimezone(zone)
        expiry = expiry.date()
    return f"{expiry.year:04d}{expiry.month:02d}{expiry.day:02d}"


def parse_expiry(expiry_field: Optional[str], zone: tzinfo) -> Optional[datetime]:
    """
    Parse an embedded ``YYYYMMDD`` field into the last second of that day.

    Returns:
        Aware datetime at 23:59:59 in ``zone``, or None if the field is
        absent, not eight digits, or not a calendar date
    """
    if not expiry_field or not EXPIRY_PATTERN.match(expiry_field):
        return None
    try:
        day = date(int(expiry_field[:4]), int(expiry_field[4:6]), int(expiry_field[6:]))
    except ValueError:
        return None
    return datetime.combine(day, time(23, 59, 59), tzinfo=zone)


@dataclass(frozen=True)
class LicenseKey:
    """
    Decoded license key.

    A value type re-derivable from its four fields; the string form is
    the only thing that is ever persisted.
    """

    tier_code: str
    device_hash_prefix: str
    expiry_field: Optional[str]
    checksum: str

    def __str__(self) -> str:
        """Return the key in its wire format."""
        fields = [self.tier_code, self.device_hash_prefix]
        if self.expiry_field:
            fields.append(self.expiry_field)
        fields.append(self.checksum)
        return SEGMENT_SEPARATOR.join(fields)

    def is_issued_for(self, device_id: str, wildcard: str) -> bool:
        """
        Check the embedded device segment against a device identifier.

        Args:
            device_id: Full device identifier presented by the client
            wildcard: Device segment accepted for any device

        Returns:
            True if the key targets this device or carries the wildcard
        """
        if self.device_hash_prefix == wildcard:
            return True
        return self.device_hash_prefix == display_prefix(device_id)


class LicenseKeyCodec:
    """Encodes, decodes and checksums license keys with a fixed salt."""

    def __init__(self, salt: str, zone: Optional[tzinfo] = None):
        """
        Initialize codec.

        Args:
            salt: Secret salt shared by generation and verification
            zone: Zone whose calendar is used for embedded dates
        """
        if not salt:
            raise ValueError("Checksum salt cannot be empty")
        self._salt = salt
        self._zone = zone

    def checksum(self, tier_code: str, device_hash_prefix: str, expiry_field: str = "") -> str:
        """
        Compute the four character checksum for a key's fields.

        Args:
            tier_code: Tier code segment
            device_hash_prefix: Device segment
            expiry_field: Expiry segment, empty when the key has none

        Returns:
            Uppercase base-36 checksum, exactly four characters
        """
        digest = abs(rolling_hash(f"{tier_code}{device_hash_prefix}{expiry_field}{self._salt}"))
        return to_base36(digest)[:CHECKSUM_LENGTH].rjust(CHECKSUM_LENGTH, "0")

    def encode(
        self,
        device_id: str,
        tier_code: str,
        expiry: Optional[Union[date, datetime]] = None,
    ) -> str:
        """
        Generate a license key for a device.

        Args:
            device_id: Full device identifier, or ``ADMIN`` for a wildcard key
            tier_code: Plan tier code
            expiry: Optional expiry date embedded in the key

        Returns:
            License key string

        Raises:
            MalformedInputError: If the device or tier cannot form a key
        """
        if not device_id or not tier_code:
            raise MalformedInputError("Missing device identifier or tier code")
        device_hash_prefix = display_prefix(device_id)
        tier_code = tier_code.upper()
        if SEGMENT_SEPARATOR in device_hash_prefix or SEGMENT_SEPARATOR in tier_code:
            raise MalformedInputError(
                f"Key fields may not contain '{SEGMENT_SEPARATOR}'"
            )

        expiry_field = format_expiry(expiry, self._zone) if expiry else ""
        key = LicenseKey(
            tier_code=tier_code,
            device_hash_prefix=device_hash_prefix,
            expiry_field=expiry_field or None,
            checksum=self.checksum(tier_code, device_hash_prefix, expiry_field),
        )
        return str(key)

    @staticmethod
    def decode(license_key: str) -> LicenseKey:
        """
        Split a key string into its fields without verifying the checksum.

        Three segments mean no expiry; four segments carry the expiry at
        index 2.

        Raises:
            InvalidLicenseKeyError: If the key has another segment count
        """
        parts = license_key.split(SEGMENT_SEPARATOR)
        if len(parts) == 3:
            tier_code, device_hash_prefix, checksum = parts
            expiry_field = None
        elif len(parts) == 4:
            tier_code, device_hash_prefix, expiry_field, checksum = parts
        else:
            raise InvalidLicenseKeyError()
        if not tier_code or not device_hash_prefix or not checksum:
            raise InvalidLicenseKeyError()
        return LicenseKey(
            tier_code=tier_code,
            device_hash_prefix=device_hash_prefix,
            expiry_field=expiry_field,
            checksum=checksum,
        )

    def verify(self, key: LicenseKey) -> bool:
        """Recompute the checksum of a decoded key and compare it."""
        expected = self.checksum(key.tier_code, key.device_hash_prefix, key.expiry_field or "")
        return expected == key.checksum
