"""Uploaded files (fine-tune training data)."""

from __future__ import annotations

import json
import os
from pathlib import Path

from aionic.openai._base import BaseClient
from aionic.openai._config import FilesConfig
from aionic.openai._exceptions import ResponseFormatError, ValidationError
from aionic.openai._http import json_body
from aionic.openai._types import DeleteResponse, FileData, FileList, PromptCompletion

FILES_PATH = "files"
FINE_TUNE_PURPOSE = "fine-tune"


def parse_jsonl(text: str) -> list[PromptCompletion]:
    """Parse JSON-Lines training data; one malformed line fails the whole read."""
    records: list[PromptCompletion] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        try:
            records.append(PromptCompletion.from_wire(json.loads(line)))
        except (json.JSONDecodeError, ResponseFormatError) as exc:
            raise ResponseFormatError(f"Invalid JSON-Lines record on line {lineno}: {exc}") from exc
    return records


class FilesClient(BaseClient[FilesConfig]):
    config_type = FilesConfig

    def list(self) -> FileList:
        return FileList.from_wire(json_body(self._get_json(FILES_PATH)))

    def retrieve(self, file_id: str) -> FileData:
        self.config.file_id = file_id
        return FileData.from_wire(json_body(self._get_json(f"{FILES_PATH}/{file_id}")))

    def retrieve_content(self, file_id: str) -> list[PromptCompletion]:
        """Download a file's content and parse it as prompt/completion records."""
        self.config.file_id = file_id
        return parse_jsonl(self._get_json(f"{FILES_PATH}/{file_id}/content").text)

    def upload(self, file: str | os.PathLike[str]) -> FileData:
        """Upload a local ``.jsonl`` file for fine-tuning."""
        path = Path(file)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if not path.is_file():
            raise ValidationError(f"Path is not a file: {path}")
        if path.suffix.lower() != ".jsonl":
            raise ValidationError(f"File must be a .jsonl file: {path}")
        self.config.file = str(path)
        self.config.purpose = FINE_TUNE_PURPOSE

        files = {"file": self.create_file_upload_part(path)}
        r = self._post_multipart(FILES_PATH, {"purpose": FINE_TUNE_PURPOSE}, files)
        return FileData.from_wire(json_body(r))

    def delete(self, file_id: str) -> DeleteResponse:
        self.config.file_id = file_id
        return DeleteResponse.from_wire(json_body(self._delete_json(f"{FILES_PATH}/{file_id}")))
