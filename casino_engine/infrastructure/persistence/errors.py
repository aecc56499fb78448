"""Translate pymongo errors into StorageFailure"""
from contextlib import contextmanager
import logging
from typing import Iterator

from pymongo.errors import AutoReconnect, NetworkTimeout, PyMongoError, ServerSelectionTimeoutError

from casino_engine.domain.exceptions import StorageFailure

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (AutoReconnect, NetworkTimeout, ServerSelectionTimeoutError)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as e:
        retryable = isinstance(e, RETRYABLE_ERRORS)
        logger.error(f"MongoDB {operation} failed (retryable={retryable}): {e}")
        raise StorageFailure(f"{operation} failed", retryable=retryable) from e
