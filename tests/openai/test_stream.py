"""Tests for the SSE stream reassembler."""

from __future__ import annotations

import io
import json

import pytest

from aionic.openai._exceptions import StreamDecodeError
from aionic.openai._stream import StreamReassembler, areassemble, reassemble
from tests.conftest import delta, sse


def test_joins_fragments_in_order() -> None:
    body = sse(delta("Hello"), delta(", "), delta("world"), "[DONE]")
    assert reassemble([body], echo=False) == "Hello, world"


def test_done_only_stream_is_empty() -> None:
    assert reassemble([b"data: [DONE]\n"], echo=False) == ""


def test_empty_body_is_empty() -> None:
    assert reassemble([], echo=False) == ""


def test_ignores_lines_without_data_prefix() -> None:
    body = b": keep-alive\n\nevent: ping\n" + sse(delta("ok"))
    assert reassemble([body], echo=False) == "ok"


def test_skips_deltas_without_content() -> None:
    role_only = {"choices": [{"index": 0, "delta": {"role": "assistant"}}]}
    body = sse(role_only, delta("x"), delta(None), "[DONE]")
    assert reassemble([body], echo=False) == "x"


def test_strips_one_trailing_newline_per_fragment() -> None:
    body = sse(delta("a\n"), delta("b\n\n"), delta("c"))
    assert reassemble([body], echo=False) == "ab\nc"


def test_keeps_leading_whitespace() -> None:
    body = sse(delta("  indented"))
    assert reassemble([body], echo=False) == "  indented"


def test_crlf_line_endings() -> None:
    body = b'data: {"choices": [{"index": 0, "delta": {"content": "hi"}}]}\r\ndata: [DONE]\r\n'
    assert reassemble([body], echo=False) == "hi"


def test_line_split_across_chunks() -> None:
    body = sse(delta("split"), delta(" line"))
    mid = len(body) // 3
    chunks = [body[:mid], body[mid : mid * 2], body[mid * 2 :]]
    assert reassemble(chunks, echo=False) == "split line"


def test_every_byte_its_own_chunk() -> None:
    body = sse(delta("one"), delta(" two"), "[DONE]")
    assert reassemble([bytes([b]) for b in body], echo=False) == "one two"


def test_utf8_sequence_split_across_chunks() -> None:
    body = sse(delta("café ☕"))
    cut = body.index("☕".encode()) + 1
    assert reassemble([body[:cut], body[cut:]], echo=False) == "café ☕"


def test_unterminated_last_line_is_processed() -> None:
    body = sse(delta("tail")).rstrip(b"\n")
    assert reassemble([body], echo=False) == "tail"


def test_multiple_choices_are_concatenated() -> None:
    payload = {
        "choices": [
            {"index": 0, "delta": {"content": "A"}},
            {"index": 1, "delta": {"content": "B"}},
        ]
    }
    assert reassemble([sse(payload)], echo=False) == "AB"


def test_invalid_json_raises() -> None:
    body = sse(delta("fine")) + b"data: {not json\n"
    with pytest.raises(StreamDecodeError, match="Invalid JSON"):
        reassemble([body], echo=False)


def test_wrong_shape_raises() -> None:
    with pytest.raises(StreamDecodeError):
        reassemble([sse({"choices": [{"index": 0}]})], echo=False)
    with pytest.raises(StreamDecodeError):
        reassemble([sse({"id": "no-choices"})], echo=False)


def test_echo_writes_fragments_to_out() -> None:
    out = io.StringIO()
    answer = reassemble([sse(delta("He"), delta("y\n"))], echo=True, out=out)
    assert answer == "Hey"
    assert out.getvalue() == "Hey"


def test_no_echo_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    reassemble([sse(delta("quiet"))], echo=False)
    assert capsys.readouterr().out == ""


def test_fragments_property() -> None:
    r = StreamReassembler(echo=False)
    r.feed(sse(delta("a")))
    r.feed(b"data: " + json.dumps(delta("b")).encode())
    assert r.fragments == ("a",)
    assert r.finish() == "ab"
    assert r.fragments == ("a", "b")


async def test_areassemble() -> None:
    async def chunks():
        body = sse(delta("as"), delta("ync"), "[DONE]")
        for i in range(0, len(body), 7):
            yield body[i : i + 7]

    assert await areassemble(chunks(), echo=False) == "async"
