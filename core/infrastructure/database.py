"""
Database utilities and error translation.
"""

import functools
import logging
from typing import Callable, TypeVar

from django.db import DatabaseError

from core.domain.exceptions import StorageFailureError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def storage_guard(func: F) -> F:
    """
    Translate database errors raised by a repository method.

    Errors are logged and re-raised as StorageFailureError so that callers
    never mistake a failed read for an empty result.

    Usage:
        @sync_to_async
        @storage_guard
        def find_by_key(self, key):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("Storage failure in %s: %s", func.__qualname__, exc, exc_info=True)
            raise StorageFailureError() from exc

    return wrapper  # type: ignore[return-value]
