"""Text embeddings."""

from __future__ import annotations

from typing import Self

from aionic.openai._base import BaseClient
from aionic.openai._config import EmbeddingConfig
from aionic.openai._http import json_body
from aionic.openai._types import EmbeddingInput, EmbeddingResponse


class EmbeddingClient(BaseClient[EmbeddingConfig]):
    config_type = EmbeddingConfig

    def set_model(self, model: str) -> Self:
        self.config.model = model
        return self

    def embed(self, input: EmbeddingInput) -> EmbeddingResponse:
        """Embed a string, a list of strings or a list of token ids."""
        self.config.input = input
        return EmbeddingResponse.from_wire(json_body(self._post_json("embeddings")))
