from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from chunked_code_review.core.application.exceptions import RetryExhaustedError
from chunked_code_review.core.application.ports.common.exceptions import ProviderError

logger = structlog.get_logger()

_T = TypeVar("_T")


def is_transient_error(exc: BaseException) -> bool:
    """Rate limits, 5xx, connection drops and timeouts are worth another attempt."""
    if isinstance(exc, ProviderError):
        return exc.retryable
    return isinstance(exc, (TimeoutError, ConnectionError))


@dataclass(frozen=True)
class RetryPolicy:
    """Retry an async operation on transient failures with doubling backoff.

    ``max_retries`` counts retries, so the operation runs at most
    ``max_retries + 1`` times. Delays are ``base_delay``, ``2 * base_delay``,
    ``4 * base_delay``... capped at ``max_delay``. Non-retryable errors, and
    cancellation, propagate immediately.
    """

    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    is_retryable: Callable[[BaseException], bool] = field(default=is_transient_error)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    async def run(self, fn: Callable[[], Awaitable[_T]], *, operation: str = "operation") -> _T:
        # tenacity only awaits callables it can detect as coroutine functions.
        async def _attempt() -> _T:
            return await fn()

        try:
            return await self._retrying(operation)(_attempt)
        except RetryError as err:
            last_error = err.last_attempt.exception()
            raise RetryExhaustedError(
                operation, err.last_attempt.attempt_number, last_error  # type: ignore[arg-type]
            ) from last_error

    def _retrying(self, operation: str) -> AsyncRetrying:
        return AsyncRetrying(
            retry=retry_if_exception(self.is_retryable),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.base_delay, exp_base=2, max=self.max_delay),
            before_sleep=self._log_before_sleep(operation),
            reraise=False,
        )

    def _log_before_sleep(self, operation: str) -> Callable[[RetryCallState], None]:
        max_attempts = self.max_attempts

        def _log(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            logger.warning(
                "Retrying after transient error",
                operation=operation,
                attempt=retry_state.attempt_number,
                max_attempts=max_attempts,
                delay_seconds=delay,
                error_type=type(error).__name__,
                error_details=str(error),
                error_retryable=True,
            )

        return _log
