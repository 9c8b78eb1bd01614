"""Reassembly of a server-sent-event chat stream into a single answer.

``StreamReassembler`` does no I/O of its own: the caller feeds it raw body
chunks in the order they arrive. Bytes are buffered until a full line is
available, so a JSON object or a multi-byte UTF-8 sequence split across two
chunks is decoded correctly. Each complete line is handled as follows:

- lines without the ``data: `` prefix are ignored;
- the ``[DONE]`` sentinel is ignored (end of body ends the stream);
- any other payload must decode as a streamed chat chunk, otherwise
  ``StreamDecodeError`` is raised and the fragments gathered so far are lost;
- every choice carrying content has one trailing newline removed, is echoed
  to the live output (unless disabled) and appended to the answer.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import AsyncIterable, Iterable
from typing import TextIO

from aionic.openai._exceptions import ResponseFormatError, StreamDecodeError
from aionic.openai._types import StreamedResponse

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class StreamReassembler:
    """Incrementally rebuild a streamed chat answer from raw body chunks."""

    def __init__(self, *, echo: bool = True, out: TextIO | None = None) -> None:
        self._echo = echo
        self._out = out
        self._buffer = bytearray()
        self._fragments: list[str] = []

    @property
    def fragments(self) -> tuple[str, ...]:
        """The content fragments collected so far, in arrival order."""
        return tuple(self._fragments)

    def feed(self, chunk: bytes) -> None:
        """Add one body chunk and process every line it completes."""
        self._buffer.extend(chunk)
        *lines, rest = self._buffer.split(b"\n")
        self._buffer = rest
        for line in lines:
            self._process_line(line.decode("utf-8", errors="replace"))

    def finish(self) -> str:
        """Process any unterminated last line and return the joined answer."""
        if self._buffer:
            tail = self._buffer.decode("utf-8", errors="replace")
            self._buffer = bytearray()
            self._process_line(tail)
        logger.debug("Stream finished with %d fragment(s)", len(self._fragments))
        return "".join(self._fragments)

    def _process_line(self, line: str) -> None:
        line = line.removesuffix("\r")
        if not line.startswith(DATA_PREFIX):
            return
        payload = line[len(DATA_PREFIX) :]
        if payload.strip() == DONE_SENTINEL:
            return
        try:
            chunk = StreamedResponse.from_wire(json.loads(payload))
        except json.JSONDecodeError as exc:
            raise StreamDecodeError(f"Invalid JSON in stream: {payload!r}") from exc
        except ResponseFormatError as exc:
            raise StreamDecodeError(f"Unexpected stream chunk {payload!r}: {exc}") from exc

        for choice in chunk.choices:
            content = choice.delta.content
            if content is None:
                continue
            text = content.removesuffix("\n")
            if self._echo:
                out = self._out or sys.stdout
                out.write(text)
                out.flush()
            self._fragments.append(text)


def reassemble(
    chunks: Iterable[bytes], *, echo: bool = True, out: TextIO | None = None
) -> str:
    """Drain *chunks* through a fresh reassembler and return the answer."""
    reassembler = StreamReassembler(echo=echo, out=out)
    for chunk in chunks:
        reassembler.feed(chunk)
    return reassembler.finish()


async def areassemble(
    chunks: AsyncIterable[bytes], *, echo: bool = True, out: TextIO | None = None
) -> str:
    """Async counterpart of :func:`reassemble`."""
    reassembler = StreamReassembler(echo=echo, out=out)
    async for chunk in chunks:
        reassembler.feed(chunk)
    return reassembler.finish()
