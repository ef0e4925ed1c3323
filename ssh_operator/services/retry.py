"""Bounded retry with backoff for SSH connection attempts."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ssh_operator.errors import RetryExhausted
from ssh_operator.models import RetryPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryPredicate = Callable[[BaseException], bool]
RetryCallback = Callable[[BaseException, int, int, int], None]


def _always(exc: BaseException) -> bool:
    return True


class RetryExecutor:
    """Run an operation until it succeeds or the policy's attempts run out.

    Every exception is retried unless ``retry_if`` rejects it, in which
    case it propagates immediately and unchanged.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        retry_if: RetryPredicate | None = None,
        on_retry: RetryCallback | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize retry executor.

        Args:
            policy: Attempt limit and backoff bounds
            retry_if: Predicate deciding whether an exception is retried
            on_retry: Called as (exception, retry_count, retry_limit, wait_ms)
                before each wait
            sleep: Coroutine used to wait, in seconds
        """
        self.policy = policy
        self._retry_if = retry_if or _always
        self._on_retry = on_retry
        self._sleep = sleep

    @property
    def retry_limit(self) -> int:
        """Number of retries after the first attempt."""
        return self.policy.max_attempts - 1

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` with retries.

        Args:
            operation: Zero-argument coroutine function

        Returns:
            Value returned by the first successful attempt

        Raises:
            RetryExhausted: If every attempt failed
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await operation()
            except Exception as e:
                if not self._retry_if(e):
                    raise
                if attempt >= self.policy.max_attempts:
                    logger.error(
                        "Giving up after %d attempt(s): %s", attempt, e
                    )
                    raise RetryExhausted(attempt, e) from e

                wait_ms = self.policy.wait_for(attempt)
                logger.warning(
                    "Connection failed: retry %d of %d (wait %dms): %s",
                    attempt,
                    self.retry_limit,
                    wait_ms,
                    e,
                    exc_info=e,
                )
                if self._on_retry is not None:
                    self._on_retry(e, attempt, self.retry_limit, wait_ms)
                await self._sleep(wait_ms / 1000)
