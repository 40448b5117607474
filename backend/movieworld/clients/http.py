"""Shared async GET helper with linear-backoff retries for the upstream APIs."""

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp
from fastapi import status

from movieworld.clients.logger import logger
from movieworld.exceptions.upstream_exceptions import (
    InvalidApiKeyError,
    MalformedPayloadError,
    RateLimitedError,
    TransientUpstreamError,
)

PayloadCheck = Callable[[dict[str, Any]], None]

_RETRYABLE_ERRORS = (
    RateLimitedError,
    TransientUpstreamError,
    aiohttp.ClientConnectionError,
    aiohttp.ClientPayloadError,
    asyncio.TimeoutError,
)


def _retry_delay(attempt: int, base_delay: float) -> float:
    """Linear backoff: the wait grows by `base_delay` with every failed attempt."""
    return base_delay * attempt


def _raise_for_status(source: str, response_status: int) -> None:
    if response_status == status.HTTP_401_UNAUTHORIZED:
        raise InvalidApiKeyError(source)
    if response_status == status.HTTP_429_TOO_MANY_REQUESTS:
        raise RateLimitedError(source)
    if response_status >= 500:
        raise TransientUpstreamError(source, response_status)


async def get_json_async(
    *,
    session: aiohttp.ClientSession,
    source: str,
    url: str,
    params: Mapping[str, str],
    max_attempts: int = 3,
    retry_delay: float = 1.0,
    check_payload: PayloadCheck | None = None,
) -> dict[str, Any]:
    """
    GET `url` and return its JSON object body.

    Rate limiting, 5xx responses, connection errors and timeouts are retried up
    to `max_attempts` in total; once exhausted, the last error is re-raised.
    401 raises `InvalidApiKeyError` immediately, other 4xx raise
    `aiohttp.ClientResponseError` without retrying. `check_payload` may raise on
    error bodies delivered with a 200 status so they take the same path.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            async with session.get(url, params=params) as response:
                _raise_for_status(source, response.status)
                response.raise_for_status()
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedPayloadError(source, f"invalid JSON ({e})") from e
                if not isinstance(payload, dict):
                    raise MalformedPayloadError(source, "expected a JSON object")
                if check_payload is not None:
                    check_payload(payload)
                return payload
        except _RETRYABLE_ERRORS as e:
            if attempt >= max_attempts:
                logger.warning(
                    f"{source} request to {url} failed after {attempt} attempts: {e!r}"
                )
                raise
            delay = _retry_delay(attempt, retry_delay)
            logger.info(
                f"{source} request to {url} failed (attempt {attempt}/{max_attempts}): "
                f"{e!r}; retrying in {delay:.2f}s"
            )
            await asyncio.sleep(delay)
