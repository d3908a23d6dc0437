"""Async HTTP fetcher.

Responsible solely for issuing GET requests on behalf of the extraction
strategies.

Uses httpx.AsyncClient which is meant to be long-lived and reused.
A single shared client is managed by the module; see ``get_http_client``
and ``close_http_client`` for lifecycle hooks.  Strategies receive the
client as a parameter, so tests can substitute their own.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx
from tenacity import (
    RetryError,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from linkstash.core.config import settings

logger = logging.getLogger(__name__)

# Module-level shared client
_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared AsyncClient.  Creates one if missing."""
    global _http_client  # noqa: PLW0603
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            verify=settings.http_verify_ssl,
        )
    return _http_client


async def close_http_client() -> None:
    """Close the shared AsyncClient gracefully."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        _http_client = None
        logger.info("HTTP client closed.")


class FetchError(Exception):
    """Raised when a GET cannot produce an HTTP response."""


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=lambda rs: rs.attempt_number >= settings.http_max_retries + 1,
    wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=False,
)
async def _get_with_retry(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    follow_redirects: bool,
) -> httpx.Response:
    """Single GET attempt; tenacity retries on transient errors.

    httpx applies ``timeout`` to each connect/read/write separately, so the
    whole attempt, body included, is also capped at ``settings.http_timeout``.
    """
    logger.debug("HTTP GET %s", url)
    try:
        async with asyncio.timeout(settings.http_timeout):
            return await client.get(
                url,
                headers=headers,
                follow_redirects=follow_redirects,
                timeout=settings.http_timeout,
            )
    except TimeoutError as exc:
        raise httpx.ReadTimeout(
            f"GET {url} exceeded {settings.http_timeout}s"
        ) from exc


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: dict[str, str] | None = None,
    follow_redirects: bool = False,
) -> httpx.Response:
    """GET *url* with the configured timeout and return the raw response.

    Any status code is returned as-is; interpreting it is up to the caller.
    Timeouts and connection failures are retried ``settings.http_max_retries``
    times (none by default).  The ``stop`` condition reads the setting
    per-attempt so patches in tests work as expected.

    Raises:
        FetchError: when no response could be obtained.
    """
    try:
        return await _get_with_retry(client, url, headers or {}, follow_redirects)
    except RetryError as exc:
        raise FetchError(
            f"Failed to fetch {url} after {settings.http_max_retries + 1} attempts: "
            f"{exc.last_attempt.exception()}"
        ) from exc
    except httpx.InvalidURL as exc:
        raise FetchError(f"Invalid URL '{url}': {exc}") from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"Request error for '{url}': {exc}") from exc
