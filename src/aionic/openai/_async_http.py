"""Async HTTP helpers using ``httpx``."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from aionic.openai._exceptions import ResponseFormatError
from aionic.openai._http import _raise_for_status_httpx, _timeout

logger = logging.getLogger(__name__)


async def async_post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float | None = None,
) -> Any:
    """POST JSON asynchronously and return the decoded response body."""
    logger.debug("POST %s", url)
    async with httpx.AsyncClient() as client:
        r = await client.post(url, headers=headers, json=payload, timeout=_timeout(timeout))
        _raise_for_status_httpx(r)
        try:
            return r.json()
        except ValueError as exc:
            raise ResponseFormatError(f"Response body is not valid JSON: {exc}") from exc


async def async_stream_bytes(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    timeout: float | None = None,
) -> AsyncIterator[bytes]:
    """POST and yield the raw response body chunk by chunk as it arrives."""
    logger.debug("POST %s (stream=True)", url)
    async with (
        httpx.AsyncClient() as client,
        client.stream("POST", url, headers=headers, json=payload, timeout=_timeout(timeout)) as r,
    ):
        if not r.is_success:
            await r.aread()
            _raise_for_status_httpx(r)
        async for chunk in r.aiter_bytes():
            yield chunk
