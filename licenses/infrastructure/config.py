"""
Build the licensing configuration object from Django settings.
"""
import logging
from typing import Any, Dict, Optional

from django.conf import settings

from licenses.domain.config import (
    DEFAULT_CHECKSUM_SALT,
    DEFAULT_TIERS,
    WILDCARD_DEVICE_PREFIX,
    LicenseTier,
    LicensingConfig,
)

logger = logging.getLogger(__name__)


def load_licensing_config(overrides: Optional[Dict[str, Any]] = None) -> LicensingConfig:
    """
    Read the ``LICENSING`` settings dict into a LicensingConfig.

    Args:
        overrides: Values that take precedence over settings

    Returns:
        LicensingConfig instance
    """
    options = dict(getattr(settings, "LICENSING", {}))
    options.update(overrides or {})

    tiers = DEFAULT_TIERS
    if options.get("TIERS"):
        tiers = tuple(
            LicenseTier(
                name=name,
                code=tier_options["code"],
                duration_days=int(tier_options["duration_days"]),
            )
            for name, tier_options in options["TIERS"].items()
        )

    salt = options.get("CHECKSUM_SALT") or DEFAULT_CHECKSUM_SALT
    if salt == DEFAULT_CHECKSUM_SALT and not settings.DEBUG:
        logger.warning("LICENSE_CHECKSUM_SALT is not set; using the built-in salt")

    return LicensingConfig(
        checksum_salt=salt,
        verify_checksum=bool(options.get("VERIFY_CHECKSUM", True)),
        wildcard_device_prefix=options.get("WILDCARD_DEVICE_PREFIX", WILDCARD_DEVICE_PREFIX),
        default_validity_years=int(options.get("DEFAULT_VALIDITY_YEARS", 1)),
        time_zone=options.get("TIME_ZONE") or settings.TIME_ZONE,
        tiers=tiers,
    )
