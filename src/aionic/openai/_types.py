"""Message, streaming and response types for the OpenAI API.

Response types are parsed strictly: a body that is missing a required field,
or carries a field of the wrong JSON type, raises ``ResponseFormatError``.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from aionic.openai._exceptions import ResponseFormatError

type EmbeddingInput = str | list[str] | list[int]

_MISSING: Any = object()


def _get(
    data: Any,
    key: str,
    kind: type | tuple[type, ...],
    default: Any = _MISSING,
) -> Any:
    """Return ``data[key]`` if present and of type *kind*; ``null`` counts as absent."""
    if not isinstance(data, dict):
        raise ResponseFormatError(f"Expected a JSON object, got {type(data).__name__}")
    value = data.get(key)
    if value is None:
        if default is _MISSING:
            raise ResponseFormatError(f"Missing required field {key!r}")
        return default
    kinds = kind if isinstance(kind, tuple) else (kind,)
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise ResponseFormatError(
            f"Field {key!r} has type {type(value).__name__}, expected "
            + " | ".join(k.__name__ for k in kinds)
        )
    return value


def _get_list[T](
    data: Any,
    key: str,
    parse: Callable[[Any], T],
    default: Any = _MISSING,
) -> tuple[T, ...]:
    items = _get(data, key, list, default)
    if items is default:
        return default
    return tuple(parse(item) for item in items)


def _number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseFormatError(f"Expected a number, got {type(value).__name__}")
    return float(value)


# --- Messages ---


class MessageRole(enum.StrEnum):
    """The author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    FUNCTION = "function"

    @classmethod
    def parse(cls, value: str) -> MessageRole:
        """Map a wire role to a MessageRole; anything unknown is treated as ``user``."""
        try:
            return cls(value)
        except ValueError:
            return cls.USER


@dataclass(frozen=True, slots=True)
class FunctionCall:
    """A function call requested by the model; ``arguments`` is a JSON string."""

    name: str
    arguments: str


@dataclass(frozen=True, slots=True)
class Message:
    """A chat message. ``name`` is only meaningful for the ``function`` role."""

    role: MessageRole
    content: str = ""
    name: str | None = None
    function_call: FunctionCall | None = None

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(MessageRole.USER, content)

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(MessageRole.SYSTEM, content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(MessageRole.ASSISTANT, content)

    def to_wire(self) -> dict[str, Any]:
        msg: dict[str, Any] = {"role": str(self.role), "content": self.content}
        if self.name is not None:
            msg["name"] = self.name
        if self.function_call is not None:
            msg["function_call"] = {
                "name": self.function_call.name,
                "arguments": self.function_call.arguments,
            }
        return msg

    @classmethod
    def from_wire(cls, data: Any) -> Message:
        fc = _get(data, "function_call", dict, None)
        return cls(
            role=MessageRole.parse(_get(data, "role", str)),
            content=_get(data, "content", str, ""),
            name=_get(data, "name", str, None),
            function_call=(
                FunctionCall(name=_get(fc, "name", str), arguments=_get(fc, "arguments", str))
                if fc is not None
                else None
            ),
        )

    def __str__(self) -> str:
        return f"{self.role}: {self.content}"


@dataclass(frozen=True, slots=True)
class Function:
    """A function the model may call, described by a JSON Schema."""

    name: str
    parameters: dict[str, Any] = field(default_factory=dict)
    description: str | None = None

    def to_wire(self) -> dict[str, Any]:
        fn: dict[str, Any] = {"name": self.name, "parameters": self.parameters}
        if self.description is not None:
            fn["description"] = self.description
        return fn

    @classmethod
    def from_wire(cls, data: Any) -> Function:
        return cls(
            name=_get(data, "name", str),
            parameters=_get(data, "parameters", dict, {}),
            description=_get(data, "description", str, None),
        )


# --- Streaming ---


@dataclass(frozen=True, slots=True)
class Delta:
    """One incremental fragment of a streamed answer."""

    role: str | None = None
    content: str | None = None


@dataclass(frozen=True, slots=True)
class StreamedChoice:
    index: int
    delta: Delta
    finish_reason: str | None = None


@dataclass(frozen=True, slots=True)
class StreamedResponse:
    """The JSON object carried by one ``data:`` line of a chat stream."""

    choices: tuple[StreamedChoice, ...]
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""

    @classmethod
    def from_wire(cls, data: Any) -> StreamedResponse:
        return cls(
            choices=_get_list(data, "choices", _parse_streamed_choice),
            id=_get(data, "id", str, ""),
            object=_get(data, "object", str, ""),
            created=_get(data, "created", int, 0),
            model=_get(data, "model", str, ""),
        )


def _parse_streamed_choice(data: Any) -> StreamedChoice:
    delta = _get(data, "delta", dict)
    return StreamedChoice(
        index=_get(data, "index", int, 0),
        delta=Delta(role=_get(delta, "role", str, None), content=_get(delta, "content", str, None)),
        finish_reason=_get(data, "finish_reason", str, None),
    )


# --- Common ---


@dataclass(frozen=True, slots=True)
class Usage:
    """Token usage counts."""

    prompt_tokens: int = 0
    total_tokens: int = 0
    completion_tokens: int | None = None

    @classmethod
    def from_wire(cls, data: Any) -> Usage:
        return cls(
            prompt_tokens=_get(data, "prompt_tokens", int),
            total_tokens=_get(data, "total_tokens", int),
            completion_tokens=_get(data, "completion_tokens", int, None),
        )


@dataclass(frozen=True, slots=True)
class Model:
    id: str
    object: str = "model"
    owned_by: str = ""

    @classmethod
    def from_wire(cls, data: Any) -> Model:
        return cls(
            id=_get(data, "id", str),
            object=_get(data, "object", str, "model"),
            owned_by=_get(data, "owned_by", str, ""),
        )


# --- Chat ---


@dataclass(frozen=True, slots=True)
class ChatChoice:
    index: int
    message: Message
    finish_reason: str | None = None


@dataclass(frozen=True, slots=True)
class ChatResponse:
    """A non-streamed chat completion."""

    choices: tuple[ChatChoice, ...] = ()
    id: str = ""
    object: str = ""
    created: int = 0
    model: str = ""
    usage: Usage | None = None

    @classmethod
    def from_wire(cls, data: Any) -> ChatResponse:
        raw_usage = _get(data, "usage", dict, None)
        return cls(
            choices=_get_list(
                data,
                "choices",
                lambda c: ChatChoice(
                    index=_get(c, "index", int, 0),
                    message=Message.from_wire(_get(c, "message", dict)),
                    finish_reason=_get(c, "finish_reason", str, None),
                ),
                (),
            ),
            id=_get(data, "id", str, ""),
            object=_get(data, "object", str, ""),
            created=_get(data, "created", int, 0),
            model=_get(data, "model", str, ""),
            usage=Usage.from_wire(raw_usage) if raw_usage is not None else None,
        )


# --- Images ---


@dataclass(frozen=True, slots=True)
class ImageData:
    url: str | None = None
    b64_json: str | None = None


@dataclass(frozen=True, slots=True)
class ImageResponse:
    created: int
    data: tuple[ImageData, ...]

    @classmethod
    def from_wire(cls, data: Any) -> ImageResponse:
        return cls(
            created=_get(data, "created", int),
            data=_get_list(
                data,
                "data",
                lambda d: ImageData(url=_get(d, "url", str, None), b64_json=_get(d, "b64_json", str, None)),
            ),
        )


# --- Embeddings ---


@dataclass(frozen=True, slots=True)
class EmbeddingData:
    embedding: tuple[float, ...]
    index: int
    object: str = "embedding"


@dataclass(frozen=True, slots=True)
class EmbeddingResponse:
    data: tuple[EmbeddingData, ...]
    model: str
    usage: Usage
    object: str = "list"

    @classmethod
    def from_wire(cls, data: Any) -> EmbeddingResponse:
        return cls(
            data=_get_list(
                data,
                "data",
                lambda d: EmbeddingData(
                    embedding=tuple(_number(x) for x in _get(d, "embedding", list)),
                    index=_get(d, "index", int),
                    object=_get(d, "object", str, "embedding"),
                ),
            ),
            model=_get(data, "model", str),
            usage=Usage.from_wire(_get(data, "usage", dict)),
            object=_get(data, "object", str, "list"),
        )


# --- Audio ---


@dataclass(frozen=True, slots=True)
class AudioResponse:
    text: str

    @classmethod
    def from_wire(cls, data: Any) -> AudioResponse:
        return cls(text=_get(data, "text", str))


# --- Files ---


@dataclass(frozen=True, slots=True)
class FileData:
    """Metadata of an uploaded file."""

    id: str
    bytes: int
    created_at: int
    filename: str
    purpose: str
    object: str = "file"

    @classmethod
    def from_wire(cls, data: Any) -> FileData:
        return cls(
            id=_get(data, "id", str),
            bytes=_get(data, "bytes", int),
            created_at=_get(data, "created_at", int),
            filename=_get(data, "filename", str),
            purpose=_get(data, "purpose", str),
            object=_get(data, "object", str, "file"),
        )


@dataclass(frozen=True, slots=True)
class FileList:
    data: tuple[FileData, ...]
    object: str = "list"

    @classmethod
    def from_wire(cls, data: Any) -> FileList:
        return cls(
            data=_get_list(data, "data", FileData.from_wire),
            object=_get(data, "object", str, "list"),
        )


@dataclass(frozen=True, slots=True)
class DeleteResponse:
    id: str
    deleted: bool
    object: str = ""

    @classmethod
    def from_wire(cls, data: Any) -> DeleteResponse:
        return cls(
            id=_get(data, "id", str),
            deleted=_get(data, "deleted", bool),
            object=_get(data, "object", str, ""),
        )


@dataclass(frozen=True, slots=True)
class PromptCompletion:
    """One line of a fine-tune training file."""

    prompt: str
    completion: str

    @classmethod
    def from_wire(cls, data: Any) -> PromptCompletion:
        return cls(prompt=_get(data, "prompt", str), completion=_get(data, "completion", str))


# --- Fine-tunes ---


@dataclass(frozen=True, slots=True)
class FineTuneEvent:
    created_at: int
    level: str
    message: str
    object: str = "fine-tune-event"

    @classmethod
    def from_wire(cls, data: Any) -> FineTuneEvent:
        return cls(
            created_at=_get(data, "created_at", int),
            level=_get(data, "level", str),
            message=_get(data, "message", str),
            object=_get(data, "object", str, "fine-tune-event"),
        )


@dataclass(frozen=True, slots=True)
class FineTuneEventList:
    data: tuple[FineTuneEvent, ...]
    object: str = "list"

    @classmethod
    def from_wire(cls, data: Any) -> FineTuneEventList:
        return cls(
            data=_get_list(data, "data", FineTuneEvent.from_wire),
            object=_get(data, "object", str, "list"),
        )


@dataclass(frozen=True, slots=True)
class HyperParams:
    batch_size: int | None = None
    learning_rate_multiplier: float | None = None
    n_epochs: int | None = None
    prompt_loss_weight: float | None = None

    @classmethod
    def from_wire(cls, data: Any) -> HyperParams:
        lr = _get(data, "learning_rate_multiplier", (int, float), None)
        plw = _get(data, "prompt_loss_weight", (int, float), None)
        return cls(
            batch_size=_get(data, "batch_size", int, None),
            learning_rate_multiplier=float(lr) if lr is not None else None,
            n_epochs=_get(data, "n_epochs", int, None),
            prompt_loss_weight=float(plw) if plw is not None else None,
        )


@dataclass(frozen=True, slots=True)
class FineTuneResponse:
    """A fine-tune job."""

    id: str
    model: str
    created_at: int
    status: str
    object: str = "fine-tune"
    events: tuple[FineTuneEvent, ...] = ()
    fine_tuned_model: str | None = None
    hyperparams: HyperParams = field(default_factory=HyperParams)
    organization_id: str = ""
    result_files: tuple[FileData, ...] = ()
    validation_files: tuple[FileData, ...] = ()
    training_files: tuple[FileData, ...] = ()
    updated_at: int = 0

    @classmethod
    def from_wire(cls, data: Any) -> FineTuneResponse:
        raw_hp = _get(data, "hyperparams", dict, None)
        return cls(
            id=_get(data, "id", str),
            model=_get(data, "model", str),
            created_at=_get(data, "created_at", int),
            status=_get(data, "status", str),
            object=_get(data, "object", str, "fine-tune"),
            events=_get_list(data, "events", FineTuneEvent.from_wire, ()),
            fine_tuned_model=_get(data, "fine_tuned_model", str, None),
            hyperparams=HyperParams.from_wire(raw_hp) if raw_hp is not None else HyperParams(),
            organization_id=_get(data, "organization_id", str, ""),
            result_files=_get_list(data, "result_files", FileData.from_wire, ()),
            validation_files=_get_list(data, "validation_files", FileData.from_wire, ()),
            training_files=_get_list(data, "training_files", FileData.from_wire, ()),
            updated_at=_get(data, "updated_at", int, 0),
        )


@dataclass(frozen=True, slots=True)
class FineTuneList:
    data: tuple[FineTuneResponse, ...] = ()
    object: str = "list"

    @classmethod
    def from_wire(cls, data: Any) -> FineTuneList:
        return cls(
            data=_get_list(data, "data", FineTuneResponse.from_wire, ()),
            object=_get(data, "object", str, "list"),
        )


# --- Moderations ---

# wire key -> attribute name, shared by categories and scores
_MODERATION_KEYS: dict[str, str] = {
    "sexual": "sexual",
    "hate": "hate",
    "harassment": "harassment",
    "self-harm": "self_harm",
    "sexual/minors": "sexual_minors",
    "hate/threatening": "hate_threatening",
    "violence/graphic": "violence_graphic",
    "self-harm/intent": "self_harm_intent",
    "self-harm/instructions": "self_harm_instructions",
    "harassment/threatening": "harassment_threatening",
    "violence": "violence",
}


@dataclass(frozen=True, slots=True)
class ModerationCategories:
    sexual: bool
    hate: bool
    harassment: bool
    self_harm: bool
    sexual_minors: bool
    hate_threatening: bool
    violence_graphic: bool
    self_harm_intent: bool
    self_harm_instructions: bool
    harassment_threatening: bool
    violence: bool

    @classmethod
    def from_wire(cls, data: Any) -> ModerationCategories:
        return cls(**{attr: _get(data, key, bool) for key, attr in _MODERATION_KEYS.items()})


@dataclass(frozen=True, slots=True)
class ModerationScores:
    sexual: float
    hate: float
    harassment: float
    self_harm: float
    sexual_minors: float
    hate_threatening: float
    violence_graphic: float
    self_harm_intent: float
    self_harm_instructions: float
    harassment_threatening: float
    violence: float

    @classmethod
    def from_wire(cls, data: Any) -> ModerationScores:
        return cls(
            **{
                attr: float(_get(data, key, (int, float)))
                for key, attr in _MODERATION_KEYS.items()
            }
        )


@dataclass(frozen=True, slots=True)
class ModerationResult:
    flagged: bool
    categories: ModerationCategories
    category_scores: ModerationScores


@dataclass(frozen=True, slots=True)
class ModerationResponse:
    id: str
    model: str
    results: tuple[ModerationResult, ...]

    @classmethod
    def from_wire(cls, data: Any) -> ModerationResponse:
        return cls(
            id=_get(data, "id", str),
            model=_get(data, "model", str),
            results=_get_list(
                data,
                "results",
                lambda r: ModerationResult(
                    flagged=_get(r, "flagged", bool),
                    categories=ModerationCategories.from_wire(_get(r, "categories", dict)),
                    category_scores=ModerationScores.from_wire(_get(r, "category_scores", dict)),
                ),
            ),
        )
