"""Shared test fixtures."""

from __future__ import annotations

import email
import email.policy
import json
from collections.abc import Iterator
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest


class MockResponse:
    """Mimics ``requests.Response`` for the JSON, multipart and streaming helpers."""

    def __init__(
        self,
        json_data: Any = None,
        status_code: int = 200,
        text: str = "",
        chunks: list[bytes] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self._json_data = json_data
        self.text = text or (json.dumps(json_data) if json_data is not None else "")
        self.ok = 200 <= status_code < 300
        self._chunks = chunks or []
        self.headers: dict[str, str] = headers or {}
        self.url = "https://api.test/v1"
        self.closed = False

    def json(self) -> Any:
        if self._json_data is None:
            raise ValueError("No JSON")
        return self._json_data

    def iter_content(self, chunk_size: int | None = None) -> Iterator[bytes]:
        return iter(self._chunks)

    def __enter__(self) -> MockResponse:
        return self

    def __exit__(self, *args: object) -> None:
        self.closed = True


def sse(*payloads: dict[str, Any] | str) -> bytes:
    """Encode stream payloads as ``data:`` lines; strings are sent verbatim."""
    lines = [
        f"data: {p if isinstance(p, str) else json.dumps(p, ensure_ascii=False)}\n"
        for p in payloads
    ]
    return "".join(lines).encode()


def delta(content: str | None, index: int = 0) -> dict[str, Any]:
    d: dict[str, Any] = {} if content is None else {"content": content}
    return {"id": "chatcmpl-1", "object": "chat.completion.chunk", "choices": [{"index": index, "delta": d}]}


def completion(*contents: str) -> dict[str, Any]:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 1,
        "model": "gpt-3.5-turbo",
        "choices": [
            {"index": i, "message": {"role": "assistant", "content": c}, "finish_reason": "stop"}
            for i, c in enumerate(contents)
        ],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2, "total_tokens": 7},
    }


@pytest.fixture(autouse=True)
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    return "sk-test"


@pytest.fixture
def mock_post(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Monkeypatch ``requests.post`` and return the mock."""
    mock = MagicMock()
    monkeypatch.setattr("requests.post", mock)
    return mock


@pytest.fixture
def mock_get(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mock = MagicMock()
    monkeypatch.setattr("requests.get", mock)
    return mock


@pytest.fixture
def mock_delete(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    mock = MagicMock()
    monkeypatch.setattr("requests.delete", mock)
    return mock


class MultipartRecorder:
    """Stands in for the ``httpx`` transport used by multipart uploads."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200, json={})

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def form_parts(request: httpx.Request) -> dict[str, tuple[str | None, bytes]]:
    """Split a recorded multipart body into ``{name: (filename, payload)}``."""
    raw = f"Content-Type: {request.headers['Content-Type']}\r\n\r\n".encode() + request.content
    msg = email.message_from_bytes(raw, policy=email.policy.HTTP)
    parts: dict[str, tuple[str | None, bytes]] = {}
    for part in msg.iter_parts():
        name = part.get_param("name", header="content-disposition")
        parts[name] = (part.get_filename(), part.get_payload(decode=True))
    return parts


def form_fields(request: httpx.Request) -> dict[str, str]:
    """The non-file fields of a recorded multipart body."""
    return {k: v.decode() for k, (filename, v) in form_parts(request).items() if filename is None}


@pytest.fixture
def mock_multipart(monkeypatch: pytest.MonkeyPatch) -> MultipartRecorder:
    """Route ``httpx.Client`` through a recorder; set ``.response`` to shape the reply."""
    recorder = MultipartRecorder()
    real_client = httpx.Client

    def factory(**kwargs: Any) -> httpx.Client:
        return real_client(transport=httpx.MockTransport(recorder.handle), **kwargs)

    monkeypatch.setattr(httpx, "Client", factory)
    return recorder
