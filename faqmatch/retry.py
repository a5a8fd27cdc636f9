"""
Retry with exponential backoff for knowledge-base fetches.

Remote FAQ tables and pages occasionally time out or answer 5xx/429;
these helpers retry such calls a bounded number of times.
"""

import time
import functools
from typing import Callable, Type, Tuple, Optional


class RetryError(Exception):
    """Raised when all retry attempts are exhausted."""
    pass


class TransientHTTPError(Exception):
    """An HTTP response whose status is worth retrying (see should_retry_http_status)."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


def exponential_backoff(
    max_retries: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    exponential_base: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    on_retry: Optional[Callable] = None,
):
    """
    Decorator for retrying functions with exponential backoff.

    Args:
        max_retries: Maximum number of retry attempts (0 = no retries)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay between retries in seconds
        exponential_base: Base for exponential calculation (delay *= base)
        exceptions: Tuple of exceptions to catch and retry
        on_retry: Optional callback function(attempt, exception, delay)

    Example:
        @exponential_backoff(max_retries=2, exceptions=(requests.exceptions.Timeout,))
        def fetch_faq_rows(url):
            return requests.get(url, timeout=10)
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            delay = base_delay

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries:
                        raise RetryError(
                            f"Failed after {max_retries + 1} attempts: {e}"
                        ) from e

                    current_delay = min(delay, max_delay)
                    if on_retry:
                        on_retry(attempt + 1, e, current_delay)
                    time.sleep(current_delay)
                    delay *= exponential_base

        return wrapper
    return decorator


def should_retry_http_status(status_code: int) -> bool:
    """True for timeouts, rate limiting and server-side failures."""
    return status_code in {408, 429, 500, 502, 503, 504}
