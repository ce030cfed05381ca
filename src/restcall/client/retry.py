"""Shared retry configuration for transports.

Retries belong to the transport: the request pipeline itself performs at most
one send per call and never retries on a status code.
"""

import logging
from typing import Callable

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger("restcall")


# Shared retry configuration - used by all transports
RETRY_CONFIG = {
    "attempts": 3,
    "wait": wait_exponential_jitter(initial=1, max=10, jitter=2),
    "reraise": True,
}


def get_retry_decorator(
    is_retryable: Callable[[BaseException], bool],
    attempts: int | None = None,
):
    """Create a retry decorator with the shared config.

    Works for both plain functions and coroutine functions.

    Args:
        is_retryable: Function that takes an exception and returns True
            if the operation should be retried.
        attempts: Total attempts including the first one. Defaults to
            RETRY_CONFIG["attempts"].

    Returns:
        A tenacity retry decorator configured with standard settings.

    Example:
        send = get_retry_decorator(is_retryable_connection_error)(self._send_once)
    """
    return retry(
        stop=stop_after_attempt(attempts or RETRY_CONFIG["attempts"]),
        wait=RETRY_CONFIG["wait"],
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=RETRY_CONFIG["reraise"],
    )


def is_retryable_connection_error(exception: BaseException) -> bool:
    """Check if the exception is a connection or timeout failure.

    Args:
        exception: The exception to check

    Returns:
        True if the request never reached the server or timed out
    """
    return isinstance(exception, (httpx.ConnectError, httpx.TimeoutException))
