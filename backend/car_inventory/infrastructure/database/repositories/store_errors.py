"""Translate driver-level failures into the domain's store error."""

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from car_inventory.domain.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

_UNAVAILABLE = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    asyncio.TimeoutError,
    TimeoutError,
    ConnectionError,
)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise timeouts and connectivity failures as ``StoreUnavailableError``."""
    try:
        yield
    except _UNAVAILABLE as exc:
        logger.error("Store unavailable during %s: %s", operation, exc)
        raise StoreUnavailableError(f"Data store unavailable during {operation}") from exc
