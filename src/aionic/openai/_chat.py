"""Chat completions and the conversation history they build up."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from typing import Self

from aionic.openai._base import BaseClient, clamp_temperature
from aionic.openai._config import ChatConfig
from aionic.openai._http import iter_chunks, json_body
from aionic.openai._stream import reassemble
from aionic.openai._types import ChatResponse, Message

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_PATH = "chat/completions"


class _ChatMixin:
    """Builders and history bookkeeping shared by the sync and async chat clients."""

    config: ChatConfig
    disable_live_stream: bool

    def set_model(self, model: str) -> Self:
        self.config.model = model
        return self

    def set_max_tokens(self, max_tokens: int) -> Self:
        self.config.max_tokens = max_tokens
        return self

    def set_messages(self, messages: list[Message]) -> Self:
        """Replace the conversation history."""
        self.config.messages = list(messages)
        return self

    def set_temperature(self, temperature: float) -> Self:
        self.config.temperature = clamp_temperature(temperature, ChatConfig.MAX_TEMPERATURE)
        return self

    def set_stream(self, stream: bool) -> Self:
        self.config.stream = stream
        return self

    def set_primer(self, primer: str) -> Self:
        """Insert a system message at the front of the history.

        Repeated primers stack: the most recent one ends up first.
        """
        self.config.messages.insert(0, Message.system(primer))
        return self

    def clear_state(self) -> Self:
        self.config.messages.clear()
        return self

    def get_last_message(self) -> Message | None:
        return self.config.messages[-1] if self.config.messages else None

    def _begin_turn(self, prompt: str | Message) -> None:
        if self.config.temperature is not None:
            self.config.temperature = clamp_temperature(
                self.config.temperature, ChatConfig.MAX_TEMPERATURE
            )
        self.config.messages.append(prompt if isinstance(prompt, Message) else Message.user(prompt))
        logger.debug(
            "Asking %s with %d message(s), stream=%s",
            self.config.model,
            len(self.config.messages),
            bool(self.config.stream),
        )

    def _end_turn(self, answer: str, persist: bool) -> None:
        if persist:
            self.config.messages.append(Message.assistant(answer))
        else:
            self.config.messages.pop()

    def _abort_turn(self) -> None:
        self.config.messages.pop()

    def _echo_choices(self, response: ChatResponse) -> str:
        # one trailing newline per choice is dropped, as for streamed deltas
        chunks: list[str] = []
        for choice in response.choices:
            text = choice.message.content.removesuffix("\n")
            if not self.disable_live_stream:
                print(f"AI: {text}", flush=True)
            chunks.append(text)
        return "".join(chunks)


class ChatClient(_ChatMixin, BaseClient[ChatConfig]):
    """Chat completions client that keeps the conversation in ``config.messages``.

    Usage::

        from aionic import ChatClient

        client = ChatClient().set_primer("Answer tersely")
        client.ask("2+2?", persist=True)
        client.ask("What did I just ask?", persist=True)
    """

    config_type = ChatConfig

    def ask(self, prompt: str | Message, persist: bool = False) -> str:
        """Send *prompt* with the current history and return the answer text.

        With ``persist=True`` the user turn and the answer stay in the history;
        otherwise the history is left exactly as it was. A failed call never
        changes the history.
        """
        self._begin_turn(prompt)
        try:
            if self.config.stream:
                answer = self._ask_streamed()
            else:
                answer = self._echo_choices(
                    ChatResponse.from_wire(json_body(self._post_json(CHAT_COMPLETIONS_PATH)))
                )
        except BaseException:
            self._abort_turn()
            raise
        self._end_turn(answer, persist)
        return answer

    def _ask_streamed(self) -> str:
        r = self._post_json(CHAT_COMPLETIONS_PATH, stream=True)
        echo = not self.disable_live_stream
        if echo:
            print("AI: ", end="", flush=True)
        try:
            with contextlib.closing(iter_chunks(r)) as chunks:
                return reassemble(chunks, echo=echo)
        finally:
            if echo:
                print()

    def chat(self, input_fn: Callable[[str], str] = input) -> None:
        """Run an interactive loop, persisting every turn, until EOF or Ctrl-C."""
        while True:
            try:
                line = input_fn(">>> ")
            except KeyboardInterrupt:
                print("CTRL-C")
                break
            except EOFError:
                print("CTRL-D")
                break
            self.ask(line, persist=True)
            print()
