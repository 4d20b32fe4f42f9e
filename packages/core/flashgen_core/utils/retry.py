"""Retry utilities for chat-completion calls.

Retries are driven by tenacity. Two conditions trigger another attempt: a
network-level exception, or an HTTP response whose status is retryable (429 or
any 5xx). Retryable responses are not raised; once the retry budget is spent
the last response is handed back to the caller for error classification.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
)

from flashgen_core.utils.logging import get_logger

logger = get_logger(__name__)

# Default retry configuration
DEFAULT_MAX_RETRIES = 3
BASE_DELAY_MS = 1000
MAX_DELAY_MS = 10000

# Exceptions that should trigger a retry
RETRYABLE_EXCEPTIONS = (
    httpx.TransportError,
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
)

SleepFunc = Callable[[float], Awaitable[None]]


def is_retryable_status(status_code: int) -> bool:
    """Return True for statuses worth another attempt."""
    return status_code == 429 or status_code >= 500


def calculate_backoff(attempt: int) -> int:
    """Delay in milliseconds before the retry following ``attempt`` (0-based)."""
    return min(BASE_DELAY_MS * 2**attempt, MAX_DELAY_MS)


def _backoff_seconds(retry_state: RetryCallState) -> float:
    return calculate_backoff(retry_state.attempt_number - 1) / 1000


def _is_retryable_response(result: Any) -> bool:
    return isinstance(result, httpx.Response) and is_retryable_status(
        result.status_code
    )


def _return_last_outcome(retry_state: RetryCallState) -> Any:
    """Hand back the final response, or re-raise the final exception."""
    return retry_state.outcome.result()


def get_async_retry(
    max_retries: int = DEFAULT_MAX_RETRIES,
    sleep: SleepFunc = asyncio.sleep,
) -> AsyncRetrying:
    """Create an async retry controller.

    Args:
        max_retries: Retries after the first attempt (total attempts = max_retries + 1)
        sleep: Coroutine used to wait between attempts, in seconds

    Returns:
        AsyncRetrying controller
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=_backoff_seconds,
        retry=(
            retry_if_exception_type(RETRYABLE_EXCEPTIONS)
            | retry_if_result(_is_retryable_response)
        ),
        retry_error_callback=_return_last_outcome,
        sleep=sleep,
    )


def _format_exception(e: BaseException) -> str:
    """Format exception for logging, handling nested/empty exceptions."""
    msg = str(e).strip()
    if not msg:
        msg = type(e).__name__

    if e.__cause__:
        cause_msg = str(e.__cause__).strip()
        if cause_msg:
            msg = f"{msg} (caused by: {cause_msg})"

    return msg or "Unknown error"


async def with_retry(
    func: Callable[..., Awaitable[httpx.Response]],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    operation_name: str = "operation",
    sleep: SleepFunc = asyncio.sleep,
    **kwargs: Any,
) -> httpx.Response:
    """Execute an HTTP call with retry logic.

    Args:
        func: Async function performing one attempt and returning a response
        *args: Positional arguments for the function
        max_retries: Retries allowed after the first attempt
        operation_name: Name for logging purposes
        sleep: Coroutine used for backoff waits
        **kwargs: Keyword arguments for the function

    Returns:
        The first non-retryable response, or the last response once retries
        are exhausted

    Raises:
        The last network exception if every attempt failed at transport level
    """
    total_attempts = max_retries + 1

    async for attempt_ctx in get_async_retry(max_retries=max_retries, sleep=sleep):
        with attempt_ctx:
            attempt = attempt_ctx.retry_state.attempt_number
            if attempt > 1:
                logger.info(
                    f"Retrying {operation_name} (attempt {attempt}/{total_attempts})"
                )
            try:
                response = await func(*args, **kwargs)
            except RETRYABLE_EXCEPTIONS as e:
                logger.warning(
                    f"{operation_name} failed (attempt {attempt}/{total_attempts}): "
                    f"{_format_exception(e)}"
                )
                raise
            if is_retryable_status(response.status_code):
                logger.warning(
                    f"{operation_name} returned HTTP {response.status_code} "
                    f"(attempt {attempt}/{total_attempts})"
                )
        outcome = attempt_ctx.retry_state.outcome
        if outcome is not None and not outcome.failed:
            attempt_ctx.retry_state.set_result(response)

    # The loop ends on a non-retryable response or once retries are exhausted
    return attempt_ctx.retry_state.outcome.result()
