"""Wall-clock budget for engine operations.

A timed-out operation has no result: callers get EvaluationTimeoutException,
never an empty or partial value.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from fleet_compliance.domain.exceptions import EvaluationTimeoutException

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_timeout(
    awaitable: Awaitable[T],
    timeout_seconds: float,
    operation: str,
) -> T:
    """Await `awaitable`, cancelling it after `timeout_seconds`.

    Args:
        awaitable: Coroutine or future to run.
        timeout_seconds: Budget in seconds (must be > 0).
        operation: Name used in the log line and exception details.

    Returns:
        Whatever the awaitable returns.

    Raises:
        EvaluationTimeoutException: The budget was exceeded.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=float(timeout_seconds))
    except TimeoutError as e:
        logger.warning(
            "Operation %s timed out after %s seconds", operation, timeout_seconds
        )
        raise EvaluationTimeoutException(operation, timeout_seconds) from e
