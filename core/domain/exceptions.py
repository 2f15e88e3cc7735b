"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class MalformedInputError(DomainException):
    """Raised when a required license key or device identifier is missing."""

    def __init__(self, message: str = "Missing license key or device identifier"):
        super().__init__(message, code="MALFORMED_INPUT")


class StorageFailureError(DomainException):
    """Raised when the persistence layer fails to read or write."""

    def __init__(self, message: str = "License storage is unavailable"):
        super().__init__(message, code="STORAGE_FAILURE")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class LicenseNotFoundError(LicenseException):
    """Raised when a license key is not present in the ledger."""

    def __init__(self, message: str = "License key not found"):
        super().__init__(message, code="NOT_FOUND")


class InvalidLicenseKeyError(LicenseException):
    """Raised when a license key is not recognized."""

    def __init__(
        self,
        message: str = "This license key is not recognized. Please re-enter it.",
    ):
        super().__init__(message, code="INVALID_LICENSE_KEY")


class UnknownTierError(LicenseException):
    """Raised when a license plan is not part of the tier catalogue."""

    def __init__(self, message: str = "Invalid tier selected"):
        super().__init__(message, code="UNKNOWN_TIER")


class ActivationException(DomainException):
    """Base exception for activation rejections."""

    pass


class DeviceBannedError(ActivationException):
    """Raised when the requesting device is on the ban registry."""

    def __init__(
        self,
        message: str = (
            "Your device has been banned from using this service. "
            "Please contact support."
        ),
    ):
        super().__init__(message, code="DEVICE_BANNED")


class DeviceMismatchError(ActivationException):
    """Raised when a key was generated for a different device."""

    def __init__(
        self,
        message: str = (
            "This license key was generated for a different device "
            "and is not valid here."
        ),
    ):
        super().__init__(message, code="DEVICE_MISMATCH")


class AlreadyBoundElsewhereError(ActivationException):
    """Raised when a key is already locked to another device."""

    def __init__(
        self,
        message: str = (
            "This license key is already locked to another device "
            "and cannot be reused."
        ),
    ):
        super().__init__(message, code="ALREADY_BOUND_ELSEWHERE")
