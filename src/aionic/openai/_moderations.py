"""Content moderation."""

from __future__ import annotations

from aionic.openai._base import BaseClient
from aionic.openai._config import ModerationConfig
from aionic.openai._http import json_body
from aionic.openai._types import ModerationResponse


class ModerationClient(BaseClient[ModerationConfig]):
    config_type = ModerationConfig

    def moderate(self, input: str) -> ModerationResponse:
        """Classify *input* against the moderation categories."""
        self.config.input = input
        return ModerationResponse.from_wire(json_body(self._post_json("moderations")))
