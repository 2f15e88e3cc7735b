"""
Model registration for the licenses app.

The ORM models live in the infrastructure layer; importing them here lets
Django's app loading and migrations see them.
"""
from licenses.infrastructure.models import LicenseRecord  # noqa: F401
