"""Guarded calls to external collaborators."""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from nearby_bikes.domain.errors import BikeFinderError, RequestTimeoutError, UnknownError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT_SECONDS = 5.0


async def call_collaborator(
    awaitable: Awaitable[T], operation: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
) -> T:
    """Await a collaborator call with a timeout and classify its failures.

    Typed errors raised by the collaborator propagate unchanged; a timeout becomes
    ``RequestTimeoutError`` and anything else ``UnknownError``.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except BikeFinderError:
        raise
    except TimeoutError as e:
        logger.error(f"{operation} timed out after {timeout_seconds}s")
        raise RequestTimeoutError(
            f"{operation} timed out after {timeout_seconds}s",
            context={"operation": operation, "timeout_seconds": timeout_seconds},
        ) from e
    except Exception as e:
        logger.error(f"{operation} failed: {e}")
        raise UnknownError(
            f"{operation} failed: {e}",
            context={"operation": operation},
        ) from e
