"""Fine-tune jobs and the models they produce."""

from __future__ import annotations

from typing import Self

from aionic.openai._base import BaseClient
from aionic.openai._config import FineTuneConfig
from aionic.openai._http import json_body
from aionic.openai._types import (
    DeleteResponse,
    FineTuneEventList,
    FineTuneList,
    FineTuneResponse,
)

FINE_TUNES_PATH = "fine-tunes"


class FineTuneClient(BaseClient[FineTuneConfig]):
    config_type = FineTuneConfig

    def set_model(self, model: str) -> Self:
        self.config.model = model
        return self

    def create(self, training_file: str) -> FineTuneResponse:
        """Start a fine-tune job on an uploaded file id."""
        self.config.training_file = training_file
        return FineTuneResponse.from_wire(json_body(self._post_json(FINE_TUNES_PATH)))

    def list(self) -> FineTuneList:
        return FineTuneList.from_wire(json_body(self._get_json(FINE_TUNES_PATH)))

    def retrieve(self, fine_tune_id: str) -> FineTuneResponse:
        r = self._get_json(f"{FINE_TUNES_PATH}/{fine_tune_id}")
        return FineTuneResponse.from_wire(json_body(r))

    def cancel(self, fine_tune_id: str) -> FineTuneResponse:
        r = self._post_json(f"{FINE_TUNES_PATH}/{fine_tune_id}/cancel", include_config=False)
        return FineTuneResponse.from_wire(json_body(r))

    def list_events(self, fine_tune_id: str) -> FineTuneEventList:
        r = self._get_json(f"{FINE_TUNES_PATH}/{fine_tune_id}/events")
        return FineTuneEventList.from_wire(json_body(r))

    def delete_model(self, model: str) -> DeleteResponse:
        """Delete a fine-tuned model you own."""
        return DeleteResponse.from_wire(json_body(self._delete_json(f"models/{model}")))
