"""Thin HTTP helpers.

JSON requests go through ``requests``; multipart uploads go through ``httpx``,
which streams file parts from their open handles instead of building the
whole body in memory. Every helper makes exactly one attempt and returns the
raw response once its status is known to be a success; non-success statuses
raise ``APIError``.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Mapping
from typing import IO, Any

import httpx
import requests

from aionic.openai._exceptions import APIError, RateLimitError, ResponseFormatError

logger = logging.getLogger(__name__)

type FilePart = tuple[str, IO[bytes], str]
type Response = requests.Response | httpx.Response


def _parse_retry_after(headers: Mapping[str, str]) -> float | None:
    raw_retry = headers.get("Retry-After")
    if raw_retry is None:
        return None
    with contextlib.suppress(ValueError, TypeError):
        return float(raw_retry)
    return None


def _error_body(r: Response) -> dict[str, Any] | str:
    try:
        return r.json()
    except Exception:
        return r.text


def _raise_for_status(r: requests.Response) -> None:
    if not r.ok:
        body = _error_body(r)
        logger.debug("HTTP %s from %s", r.status_code, getattr(r, "url", "?"))
        if r.status_code == 429:
            raise RateLimitError(r.status_code, body, _parse_retry_after(r.headers))
        raise APIError(r.status_code, body)


def _raise_for_status_httpx(r: httpx.Response) -> None:
    if r.is_success:
        return
    body = _error_body(r)
    logger.debug("HTTP %s from %s", r.status_code, r.request.url)
    if r.status_code == 429:
        raise RateLimitError(r.status_code, body, _parse_retry_after(r.headers))
    raise APIError(r.status_code, body)


def _timeout(timeout: float | None) -> Any:
    return timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT


def json_body(r: Response) -> Any:
    """Decode a response body as JSON, raising ``ResponseFormatError`` if it is not."""
    try:
        return r.json()
    except ValueError as exc:
        raise ResponseFormatError(f"Response body is not valid JSON: {exc}") from exc


def post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any] | None,
    timeout: float | None = None,
    *,
    stream: bool = False,
) -> requests.Response:
    """POST *payload* as JSON. With ``stream=True`` the body is left unread."""
    logger.debug("POST %s (stream=%s)", url, stream)
    r = requests.post(url, headers=headers, json=payload, timeout=timeout, stream=stream)
    _raise_for_status(r)
    return r


def get_json(url: str, headers: dict[str, str], timeout: float | None = None) -> requests.Response:
    logger.debug("GET %s", url)
    r = requests.get(url, headers=headers, timeout=timeout)
    _raise_for_status(r)
    return r


def delete_json(
    url: str, headers: dict[str, str], timeout: float | None = None
) -> requests.Response:
    logger.debug("DELETE %s", url)
    r = requests.delete(url, headers=headers, timeout=timeout)
    _raise_for_status(r)
    return r


def post_multipart(
    url: str,
    headers: dict[str, str],
    data: dict[str, str],
    files: dict[str, FilePart],
    timeout: float | None = None,
) -> httpx.Response:
    """POST a multipart form, streaming each file part from its open handle.

    The handles in *files* are closed once the request has finished, whether
    or not it succeeded.
    """
    logger.debug("POST %s (multipart: %s)", url, ", ".join(files))
    try:
        with httpx.Client() as client:
            r = client.post(url, headers=headers, data=data, files=files, timeout=_timeout(timeout))
    finally:
        for _, fh, _ in files.values():
            fh.close()
    _raise_for_status_httpx(r)
    return r


def iter_chunks(r: requests.Response) -> Iterator[bytes]:
    """Yield raw body chunks as they arrive and close the response at the end."""
    with r:
        yield from r.iter_content(chunk_size=None)
