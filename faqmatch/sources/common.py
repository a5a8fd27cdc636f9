"""Shared HTTP handling for remote knowledge-base sources."""

from typing import Dict, Optional

import requests

from ..logger import get_logger
from ..retry import RetryError, TransientHTTPError, exponential_backoff, should_retry_http_status

REQUEST_TIMEOUT = 15


def _log_retry(attempt: int, error: Exception, delay: float) -> None:
    get_logger().warning("Retrying knowledge-base fetch", attempt=attempt, error=str(error), delay=delay)


@exponential_backoff(
    max_retries=3,
    base_delay=1.0,
    exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, TransientHTTPError),
    on_retry=_log_retry,
)
def _fetch_with_retry(url: str, headers: Optional[Dict[str, str]] = None, params: Optional[Dict[str, str]] = None):
    """Fetch URL, retrying timeouts, connection errors and retryable statuses."""
    resp = requests.get(url, headers=headers, params=params, timeout=REQUEST_TIMEOUT)
    if should_retry_http_status(resp.status_code):
        raise TransientHTTPError(resp.status_code, url)
    return resp


def fetch_with_error_handling(
    url: str,
    source: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, str]] = None,
):
    """Fetch URL with standardized error handling and logging.

    Args:
        url: The URL to fetch
        source: Source name for logging (e.g. 'rest', 'html')
        headers: Optional request headers
        params: Optional query parameters

    Returns:
        Response object on success

    Raises:
        ValueError: On any HTTP error, exhausted retries, or request failure
    """
    logger = get_logger()
    logger.record_source_fetch()
    try:
        resp = _fetch_with_retry(url, headers=headers, params=params)
        resp.raise_for_status()
        return resp
    except RetryError as e:
        cause = e.__cause__
        logger.record_source_failure(type(cause).__name__ if cause else "RetryError")
        logger.error(f"{source} source unavailable after retries", url=url, error=str(cause or e))
        raise ValueError(f"{source} source unavailable, try again later: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_source_failure(f"HTTPError_{status}")
        if status == 404:
            logger.warning(f"{source} URL not found", url=url, status=404)
            raise ValueError(f"{source} URL not found (404): {url}") from e
        logger.error(f"{source} request failed", url=url, status=status)
        raise ValueError(f"{source} request failed ({status}): {url}") from e
    except requests.exceptions.RequestException as e:
        logger.record_source_failure("RequestException")
        logger.error(f"{source} request error", url=url, error=str(e))
        raise ValueError(f"{source} request error: {e}") from e
