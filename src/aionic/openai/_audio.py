"""Audio transcription and translation."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Self

import httpx

from aionic.openai._base import BaseClient, clamp_temperature
from aionic.openai._config import AudioConfig, AudioResponseFormat, ISO_639_1_CODES
from aionic.openai._exceptions import ValidationError
from aionic.openai._http import json_body
from aionic.openai._types import AudioResponse

logger = logging.getLogger(__name__)


class AudioClient(BaseClient[AudioConfig]):
    """Transcribe or translate local audio files.

    The file must exist, be one of the supported containers and the model
    must be supported; these are checked before anything is sent.
    """

    config_type = AudioConfig

    def set_model(self, model: str) -> Self:
        self.config.model = model
        return self

    def set_prompt(self, prompt: str) -> Self:
        self.config.prompt = prompt
        return self

    def set_response_format(self, response_format: AudioResponseFormat | str) -> Self:
        self.config.response_format = AudioResponseFormat(response_format)
        return self

    def set_temperature(self, temperature: float) -> Self:
        self.config.temperature = clamp_temperature(temperature, AudioConfig.MAX_TEMPERATURE)
        return self

    def set_language(self, language: str | None) -> Self:
        """Set the ISO-639-1 input language; only used by transcriptions."""
        self.config.language = language
        return self

    def transcribe(self, audio_file: str | os.PathLike[str]) -> AudioResponse:
        """Transcribe *audio_file* in its own language."""
        self._set_file(audio_file)
        self._sanity_checks()
        data = self._form_fields()
        if self.config.language is not None:
            data["language"] = self.config.language
        return self._send("audio/transcriptions", data)

    def translate(self, audio_file: str | os.PathLike[str]) -> AudioResponse:
        """Translate *audio_file* into English."""
        self._set_file(audio_file)
        self._sanity_checks()
        self.config.language = None
        return self._send("audio/translations", self._form_fields())

    def _set_file(self, audio_file: str | os.PathLike[str]) -> None:
        path = Path(audio_file)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")
        if not AudioConfig.is_file_type_supported(path.name):
            raise ValidationError(
                "Invalid audio file type. Supported types are "
                f"{list(AudioConfig.SUPPORTED_FILE_TYPES)}"
            )
        self.config.file = str(path)

    def _sanity_checks(self) -> None:
        cfg = self.config
        if cfg.temperature is not None:
            cfg.temperature = clamp_temperature(cfg.temperature, AudioConfig.MAX_TEMPERATURE)
        if cfg.model not in AudioConfig.SUPPORTED_MODELS:
            raise ValidationError(
                f"Invalid model. Supported models are {list(AudioConfig.SUPPORTED_MODELS)}"
            )
        if cfg.language is not None and not AudioConfig.is_valid_language(cfg.language):
            raise ValidationError(
                "Invalid language code. Supported language codes are "
                f"{sorted(ISO_639_1_CODES)}"
            )

    def _form_fields(self) -> dict[str, str]:
        cfg = self.config
        data = {"model": cfg.model}
        if cfg.prompt is not None:
            data["prompt"] = cfg.prompt
        if cfg.response_format is not None:
            data["response_format"] = str(cfg.response_format)
        if cfg.temperature is not None:
            data["temperature"] = str(cfg.temperature)
        return data

    def _send(self, path: str, data: dict[str, str]) -> AudioResponse:
        files = {"file": self.create_file_upload_part(self.config.file)}
        r = self._post_multipart(path, data, files)
        return self._parse_response(r)

    def _parse_response(self, r: httpx.Response) -> AudioResponse:
        fmt = self.config.response_format
        if fmt is None or fmt.is_json:
            return AudioResponse.from_wire(json_body(r))
        logger.debug("Audio response format %s returned as plain text", fmt)
        return AudioResponse(text=r.text)
