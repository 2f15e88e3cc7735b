"""
Model registration for the devices app.

The ORM models live in the infrastructure layer; importing them here lets
Django's app loading and migrations see them.
"""
from devices.infrastructure.models import DeviceBan  # noqa: F401
