"""AsyncChatClient: chat completions over ``httpx``."""

from __future__ import annotations

import contextlib

from aionic.openai._async_http import async_post_json, async_stream_bytes
from aionic.openai._base import BaseClient
from aionic.openai._chat import CHAT_COMPLETIONS_PATH, _ChatMixin
from aionic.openai._config import ChatConfig
from aionic.openai._stream import areassemble
from aionic.openai._types import ChatResponse, Message


class AsyncChatClient(_ChatMixin, BaseClient[ChatConfig]):
    """Async chat client with the same builders and history rules as ``ChatClient``.

    Usage::

        from aionic import AsyncChatClient

        client = AsyncChatClient().disable_stdout()
        answer = await client.ask("Hello!", persist=True)
    """

    config_type = ChatConfig

    async def ask(self, prompt: str | Message, persist: bool = False) -> str:
        """Send *prompt* with the current history and return the answer text."""
        self._begin_turn(prompt)
        url = self._url(CHAT_COMPLETIONS_PATH)
        payload = self.config.to_wire()
        try:
            if self.config.stream:
                echo = not self.disable_live_stream
                if echo:
                    print("AI: ", end="", flush=True)
                try:
                    async with contextlib.aclosing(
                        async_stream_bytes(url, self._json_headers, payload, self.timeout)
                    ) as chunks:
                        answer = await areassemble(chunks, echo=echo)
                finally:
                    if echo:
                        print()
            else:
                raw = await async_post_json(url, self._json_headers, payload, self.timeout)
                answer = self._echo_choices(ChatResponse.from_wire(raw))
        except BaseException:
            self._abort_turn()
            raise
        self._end_turn(answer, persist)
        return answer
