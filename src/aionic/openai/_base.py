"""Shared client core: credential, transport primitives and the owned configuration."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
from typing import Any, ClassVar, Self

import httpx
import requests

from aionic.openai._config import _WireConfig
from aionic.openai._exceptions import MissingAPIKeyError, ValidationError
from aionic.openai._http import (
    FilePart,
    delete_json,
    get_json,
    json_body,
    post_json,
    post_multipart,
)
from aionic.openai._types import Model, _get_list

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "OPENAI_BASE_URL"
DEFAULT_BASE_URL = "https://api.openai.com/v1"


def _resolve_key(api_key: str | None) -> str:
    key = api_key or os.environ.get(API_KEY_ENV, "")
    if not key:
        raise MissingAPIKeyError(
            f"No API key provided. Pass api_key= or set the {API_KEY_ENV} environment variable."
        )
    return key


def clamp_temperature(temperature: float, limit: float) -> float:
    """Clamp *temperature* into ``[0, limit]``, logging when the value changes.

    NaN has no place in that range and raises ``ValidationError``.
    """
    if math.isnan(temperature):
        raise ValidationError("Temperature must be a number, got NaN")
    clamped = min(max(temperature, 0.0), limit)
    if clamped != temperature:
        logger.warning("Temperature %s is outside [0, %s]; using %s", temperature, limit, clamped)
    return clamped


class BaseClient[C: _WireConfig]:
    """Transport and configuration shared by every capability client.

    Subclasses set ``config_type`` and add the operations of their resource
    family. Builder methods mutate ``config`` in place and return the client
    so calls can be chained; they never perform I/O.
    """

    config_type: ClassVar[type[Any]]

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.api_key = _resolve_key(api_key)
        self.base_url = (base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.disable_live_stream = False
        self.config: C = self.config_type.default()

    def with_config(self, config: C) -> Self:
        """Replace the whole configuration."""
        self.config = config
        return self

    def disable_stdout(self) -> Self:
        """Stop echoing answers to stdout; only relevant for chat."""
        self.disable_live_stream = True
        return self

    # --- Transport primitives ---

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @property
    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    @property
    def _json_headers(self) -> dict[str, str]:
        return {**self._auth_headers, "Content-Type": "application/json"}

    def _post_json(
        self, path: str, *, stream: bool = False, include_config: bool = True
    ) -> requests.Response:
        payload = self.config.to_wire() if include_config else None
        return post_json(self._url(path), self._json_headers, payload, self.timeout, stream=stream)

    def _get_json(self, path: str) -> requests.Response:
        return get_json(self._url(path), self._json_headers, self.timeout)

    def _delete_json(self, path: str) -> requests.Response:
        return delete_json(self._url(path), self._auth_headers, self.timeout)

    def _post_multipart(
        self, path: str, data: dict[str, str], files: dict[str, FilePart]
    ) -> httpx.Response:
        return post_multipart(self._url(path), self._auth_headers, data, files, self.timeout)

    def create_file_upload_part(self, path: str | os.PathLike[str]) -> FilePart:
        """Open *path* for upload as a multipart file part.

        Raises ``FileNotFoundError`` if the path does not exist right now.
        """
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"File not found: {p}")
        return (p.name, p.open("rb"), "application/octet-stream")

    # --- Models ---

    def models(self) -> list[str]:
        """Return the identifiers of all available models."""
        raw = json_body(self._get_json("models"))
        return [m.id for m in _get_list(raw, "data", Model.from_wire)]

    def check_model(self, model: str) -> Model:
        """Fetch a single model by identifier."""
        return Model.from_wire(json_body(self._get_json(f"models/{model}")))
