"""Tests for AsyncChatClient over a mocked httpx transport."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest

from aionic.openai._async_chat import AsyncChatClient
from aionic.openai._exceptions import APIError, RateLimitError, StreamDecodeError
from aionic.openai._types import Message
from tests.conftest import completion, delta, sse

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


@pytest.fixture
def install(monkeypatch: pytest.MonkeyPatch) -> Callable[[Handler], list[dict[str, Any]]]:
    """Route every ``httpx.AsyncClient`` through *handler*; returns the sent bodies."""

    def _install(handler: Handler) -> list[dict[str, Any]]:
        sent: list[dict[str, Any]] = []
        real_client = httpx.AsyncClient

        async def recording(request: httpx.Request) -> httpx.Response:
            sent.append(json.loads(request.content))
            return await handler(request)

        def factory(**kwargs: Any) -> httpx.AsyncClient:
            return real_client(transport=httpx.MockTransport(recording), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", factory)
        return sent

    return _install


async def _chunked(body: bytes, size: int) -> AsyncIterator[bytes]:
    for i in range(0, len(body), size):
        yield body[i : i + size]


async def test_streamed_ask(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "https://api.openai.com/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = sse(delta("Bon"), delta("jour ☀"), "[DONE]")
        return httpx.Response(200, content=_chunked(body, 5))

    sent = install(handler)
    client = AsyncChatClient().disable_stdout()
    assert await client.ask("Hi", persist=True) == "Bonjour ☀"
    assert sent[0]["stream"] is True
    assert client.config.messages == [Message.user("Hi"), Message.assistant("Bonjour ☀")]


async def test_non_streamed_ask(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=completion("plain"))

    install(handler)
    client = AsyncChatClient().disable_stdout().set_stream(False)
    assert await client.ask("Hi") == "plain"
    assert client.config.messages == []


async def test_history_is_sent(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=sse(delta("ok")))

    sent = install(handler)
    client = AsyncChatClient().disable_stdout().set_primer("Be brief")
    await client.ask("one", persist=True)
    await client.ask("two", persist=True)
    assert [m["role"] for m in sent[1]["messages"]] == ["system", "user", "assistant", "user"]


async def test_error_status_rolls_back(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "server exploded"}})

    install(handler)
    client = AsyncChatClient().disable_stdout()
    with pytest.raises(APIError, match="server exploded") as exc_info:
        await client.ask("Hi", persist=True)
    assert exc_info.value.status_code == 500
    assert client.config.messages == []


async def test_rate_limit_while_streaming(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "slow down"}}, headers={"Retry-After": "2"})

    install(handler)
    with pytest.raises(RateLimitError) as exc_info:
        await AsyncChatClient().disable_stdout().ask("Hi")
    assert exc_info.value.retry_after == 2.0


async def test_bad_stream_rolls_back(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"data: nope\n")

    install(handler)
    client = AsyncChatClient().disable_stdout()
    with pytest.raises(StreamDecodeError):
        await client.ask("Hi", persist=True)
    assert client.config.messages == []


async def test_live_echo(install, capsys: pytest.CaptureFixture[str]) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=sse(delta("Hey"), "[DONE]"))

    install(handler)
    await AsyncChatClient().ask("Hi")
    assert capsys.readouterr().out == "AI: Hey\n"


async def test_bad_stream_closes_body_and_ends_line(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    closed: list[bool] = []

    async def body(*args: Any) -> AsyncIterator[bytes]:
        try:
            yield sse(delta("half")) + b"data: {oops\n"
            yield sse(delta("never read"))
        finally:
            closed.append(True)

    monkeypatch.setattr("aionic.openai._async_chat.async_stream_bytes", body)
    client = AsyncChatClient()
    with pytest.raises(StreamDecodeError):
        await client.ask("Hi", persist=True)

    assert closed == [True]
    assert capsys.readouterr().out == "AI: half\n"
    assert client.config.messages == []


async def test_non_stream_trailing_newline(install) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=completion("done\n"))

    install(handler)
    client = AsyncChatClient().disable_stdout().set_stream(False)
    assert await client.ask("Hi") == "done"
