"""Retry with exponential backoff for waiting on a service to come up."""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Upper bound of the random jitter added to each wait
MAX_JITTER_SECONDS = 0.5


def _log_retry(retry_state: RetryCallState) -> None:
    wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"Attempt {retry_state.attempt_number} failed: {retry_state.outcome.exception()}; "
        f"retrying in {wait:.2f}s"
    )


async def retry_operation(
    operation: Callable[[], Awaitable[T]],
    *,
    retry_on: tuple[type[BaseException], ...],
    max_attempts: int,
    initial_wait: float,
    max_wait: float,
) -> T:
    """Await operation until it succeeds or max_attempts is reached.

    Waits grow exponentially from initial_wait, capped at max_wait (jitter
    included). Exceptions outside retry_on propagate immediately.

    Raises:
        The last exception once attempts are exhausted
    """
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(
            initial=initial_wait,
            max=max_wait,
            jitter=min(MAX_JITTER_SECONDS, max_wait),
        ),
        retry=retry_if_exception_type(retry_on),
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            return await operation()
