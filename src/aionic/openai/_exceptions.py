"""Exceptions raised by the OpenAI clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class RemoteError:
    """The ``error`` object the API returns alongside a non-success status."""

    message: str
    type: str = ""
    param: str | None = None
    code: str | None = None

    @classmethod
    def from_body(cls, body: dict[str, Any] | str) -> RemoteError | None:
        if not isinstance(body, dict):
            return None
        err = body.get("error")
        if not isinstance(err, dict) or not isinstance(err.get("message"), str):
            return None
        code = err.get("code")
        return cls(
            message=err["message"],
            type=err.get("type") or "",
            param=err.get("param"),
            code=str(code) if code is not None else None,
        )


class AionicError(Exception):
    """Base class for every error raised by this package."""


class MissingAPIKeyError(AionicError, ValueError):
    """Raised when no API key is passed and none is set in the environment."""


class ValidationError(AionicError, ValueError):
    """Raised when a request fails local validation (file type, model, language, ...)."""


class ResponseFormatError(AionicError):
    """Raised when a response body does not have the expected shape."""


class StreamDecodeError(ResponseFormatError):
    """Raised when a ``data:`` line of a streamed response cannot be decoded."""


class APIError(AionicError):
    """Raised when the API returns a non-success HTTP status.

    ``str(exc)`` is the remote error message when the body carries one.
    """

    def __init__(self, status_code: int, body: dict[str, Any] | str) -> None:
        self.status_code = status_code
        self.body = body
        self.error = RemoteError.from_body(body)
        self.message = self.error.message if self.error else f"HTTP {status_code}: {body}"
        super().__init__(self.message)


class RateLimitError(APIError):
    """Raised on HTTP 429; ``retry_after`` is taken from the server when present."""

    def __init__(
        self,
        status_code: int,
        body: dict[str, Any] | str,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(status_code, body)
        self.retry_after = retry_after
