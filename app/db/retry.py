"""Rollback-and-retry wrapper for service methods that talk to the database.

Transient failures (dropped connections, locked SQLite files) are retried
with exponential backoff and jitter. Constraint violations and everything
else fail on the first attempt. Whatever escapes is re-raised as StoreError.
"""
import functools
import logging

from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError, SQLAlchemyError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from app.core.config import get_settings
from app.core.errors import StoreError

logger = logging.getLogger(__name__)


def is_transient(exc: BaseException) -> bool:
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


def backoff(base_delay: float, max_delay: float):
    """Full-jitter exponential wait: uniform in [0, min(max_delay, base_delay * 2**(n-1))]."""
    return wait_random_exponential(multiplier=base_delay, max=max_delay)


def store_operation(func):
    """Decorate an async method of an object exposing `self.db` (AsyncSession)."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        settings = get_settings()
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_transient),
            stop=stop_after_attempt(max(1, settings.db_retry_attempts)),
            wait=backoff(settings.db_retry_base_delay, settings.db_retry_max_delay),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    try:
                        return await func(self, *args, **kwargs)
                    except SQLAlchemyError:
                        await self.db.rollback()
                        raise
        except SQLAlchemyError as exc:
            logger.error(f"{func.__qualname__} failed: {exc}", exc_info=True)
            raise StoreError("Database operation failed. Please try again.") from exc

    return wrapper
