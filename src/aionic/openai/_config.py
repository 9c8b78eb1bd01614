"""Capability configurations, one request shape per API resource family.

Each configuration is a mutable dataclass owned by its client. Builder calls
on the client mutate it in place and every request serializes it afresh with
``to_wire()``, which omits fields that are ``None`` at any depth.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Self

from aionic.openai._types import EmbeddingInput, Function, Message


def _to_wire_value(value: Any) -> Any:
    if isinstance(value, (Message, Function)):
        return value.to_wire()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _to_wire_value(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_to_wire_value(v) for v in value]
    return value


class _WireConfig:
    """Shared (de)serialization for the configuration dataclasses."""

    __slots__ = ()

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON body for this configuration, without absent fields."""
        body: dict[str, Any] = {}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if value is not None:
                body[f.name] = _to_wire_value(value)
        return body

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> Self:
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        return cls(**{k: v for k, v in data.items() if k in names})


# --- Chat ---


@dataclass(slots=True)
class ChatConfig(_WireConfig):
    """Request body for ``/chat/completions``; ``messages`` is the conversation history."""

    DEFAULT_MODEL: ClassVar[str] = "gpt-3.5-turbo"
    DEFAULT_TEMPERATURE: ClassVar[float] = 1.0
    DEFAULT_MAX_TOKENS: ClassVar[int] = 2048
    DEFAULT_STREAM: ClassVar[bool] = True
    MAX_TEMPERATURE: ClassVar[float] = 2.0

    model: str = DEFAULT_MODEL
    messages: list[Message] = field(default_factory=list)
    functions: list[Function] | None = None
    function_call: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    n: int | None = None
    stream: bool | None = None
    stop: str | None = None
    max_tokens: int | None = None
    presence_penalty: float | None = None
    frequency_penalty: float | None = None
    logit_bias: dict[str, float] | None = None
    user: str | None = None

    @classmethod
    def default(cls) -> ChatConfig:
        return cls(
            model=cls.DEFAULT_MODEL,
            temperature=cls.DEFAULT_TEMPERATURE,
            max_tokens=cls.DEFAULT_MAX_TOKENS,
            stream=cls.DEFAULT_STREAM,
        )

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> ChatConfig:
        data = dict(data)
        data["messages"] = [Message.from_wire(m) for m in data.get("messages", [])]
        if data.get("functions") is not None:
            data["functions"] = [Function.from_wire(f) for f in data["functions"]]
        return super(ChatConfig, cls).from_wire(data)


# --- Images ---


class ImageResponseFormat(enum.StrEnum):
    URL = "url"
    B64_JSON = "b64_json"


@dataclass(frozen=True, slots=True)
class ImageSize:
    """Image dimensions, rendered on the wire as ``"WIDTHxHEIGHT"``."""

    width: int
    height: int

    def resize(self, width: int | None = None, height: int | None = None) -> ImageSize:
        return ImageSize(
            width if width is not None else self.width,
            height if height is not None else self.height,
        )

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(slots=True)
class ImageConfig(_WireConfig):
    """Request fields for image generation, edits and variations.

    ``image`` and ``mask`` hold local file paths; they are only sent as
    multipart file parts, never inside a JSON body.
    """

    DEFAULT_N: ClassVar[int] = 1
    DEFAULT_SIZE: ClassVar[str] = "1024x1024"
    DEFAULT_RESPONSE_FORMAT: ClassVar[str] = "url"
    VALID_SIZES: ClassVar[tuple[str, ...]] = ("256x256", "512x512", "1024x1024")
    VALID_RESPONSE_FORMATS: ClassVar[tuple[str, ...]] = ("url", "b64_json")
    MAX_N: ClassVar[int] = 10

    prompt: str | None = None
    n: int | None = None
    size: str | None = None
    response_format: str | None = None
    user: str | None = None
    image: str | None = None
    mask: str | None = None

    @classmethod
    def default(cls) -> ImageConfig:
        return cls(
            n=cls.DEFAULT_N,
            size=cls.DEFAULT_SIZE,
            response_format=cls.DEFAULT_RESPONSE_FORMAT,
        )

    @classmethod
    def is_valid_size(cls, size: str) -> bool:
        return size in cls.VALID_SIZES

    @classmethod
    def is_valid_response_format(cls, response_format: str) -> bool:
        return response_format in cls.VALID_RESPONSE_FORMATS

    @classmethod
    def is_valid_n(cls, n: int) -> bool:
        return 1 <= n <= cls.MAX_N


# --- Embeddings ---


@dataclass(slots=True)
class EmbeddingConfig(_WireConfig):
    DEFAULT_MODEL: ClassVar[str] = "text-embedding-ada-002"

    model: str = DEFAULT_MODEL
    input: EmbeddingInput = ""
    user: str | None = None

    @classmethod
    def default(cls) -> EmbeddingConfig:
        return cls(model=cls.DEFAULT_MODEL, input="")


# --- Audio ---


class AudioResponseFormat(enum.StrEnum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    @property
    def is_json(self) -> bool:
        return self in (AudioResponseFormat.JSON, AudioResponseFormat.VERBOSE_JSON)


ISO_639_1_CODES: frozenset[str] = frozenset(
    """
    ab aa af ak sq am ar an hy as av ae ay az bm ba eu be bn bh bi bs br bg my ca ch ce ny
    zh cv kw co cr hr cs da dv nl dz en eo et ee fo fj fi fr ff gl ka de el gn gu ht ha he
    hz hi ho hu ia id ie ga ig ik io is it iu ja jv kl kn kr ks kk km ki rw ky kv kg ko ku
    kj la lb lg li ln lo lt lu lv gv mk mg ms ml mt mi mr mh mn na nv nd ne ng nb nn no ii
    nr oc oj cu om or os pa pi fa pl ps pt qu rm rn ro ru sa sc sd se sm sg sr gd sn si sk
    sl so st es su sw ss sv ta te th ti to tn ts tk tr tw ug uk ur uz ve vi vo wa cy wo fy
    xh yi yo za zu
    """.split()
)


@dataclass(slots=True)
class AudioConfig(_WireConfig):
    """Request fields for transcriptions and translations; ``file`` is a local path."""

    DEFAULT_MODEL: ClassVar[str] = "whisper-1"
    DEFAULT_RESPONSE_FORMAT: ClassVar[AudioResponseFormat] = AudioResponseFormat.JSON
    DEFAULT_TEMPERATURE: ClassVar[float] = 0.0
    MAX_TEMPERATURE: ClassVar[float] = 1.0
    SUPPORTED_MODELS: ClassVar[tuple[str, ...]] = ("whisper-1",)
    SUPPORTED_FILE_TYPES: ClassVar[tuple[str, ...]] = (
        "mp3",
        "mp4",
        "mpeg",
        "mpga",
        "m4a",
        "wav",
        "webm",
    )

    file: str = ""
    model: str = DEFAULT_MODEL
    prompt: str | None = None
    response_format: AudioResponseFormat | None = None
    temperature: float | None = None
    language: str | None = None

    @classmethod
    def default(cls) -> AudioConfig:
        return cls(
            model=cls.DEFAULT_MODEL,
            response_format=cls.DEFAULT_RESPONSE_FORMAT,
            temperature=cls.DEFAULT_TEMPERATURE,
        )

    @classmethod
    def from_wire(cls, data: dict[str, Any]) -> AudioConfig:
        data = dict(data)
        if data.get("response_format") is not None:
            data["response_format"] = AudioResponseFormat(data["response_format"])
        return super(AudioConfig, cls).from_wire(data)

    @classmethod
    def is_file_type_supported(cls, file_name: str) -> bool:
        _, dot, ext = file_name.rpartition(".")
        return bool(dot) and ext.lower() in cls.SUPPORTED_FILE_TYPES

    @staticmethod
    def is_valid_language(language: str) -> bool:
        return len(language) == 2 and language in ISO_639_1_CODES


# --- Files ---


@dataclass(slots=True)
class FilesConfig(_WireConfig):
    file: str | None = None
    purpose: str | None = None
    file_id: str | None = None

    @classmethod
    def default(cls) -> FilesConfig:
        return cls()


# --- Fine-tunes ---


@dataclass(slots=True)
class FineTuneConfig(_WireConfig):
    """Request body for ``/fine-tunes``."""

    DEFAULT_MODEL: ClassVar[str] = "curie"
    DEFAULT_N_EPOCHS: ClassVar[int] = 4
    DEFAULT_PROMPT_LOSS_WEIGHT: ClassVar[float] = 0.01
    DEFAULT_COMPUTE_CLASSIFICATION_METRICS: ClassVar[bool] = False

    training_file: str = ""
    validation_file: str | None = None
    model: str | None = None
    n_epochs: int | None = None
    batch_size: int | None = None
    learning_rate_multiplier: float | None = None
    prompt_loss_weight: float | None = None
    compute_classification_metrics: bool | None = None
    classification_n_classes: int | None = None
    classification_positive_class: str | None = None
    classification_betas: list[float] | None = None
    suffix: str | None = None

    @classmethod
    def default(cls) -> FineTuneConfig:
        return cls(
            model=cls.DEFAULT_MODEL,
            n_epochs=cls.DEFAULT_N_EPOCHS,
            prompt_loss_weight=cls.DEFAULT_PROMPT_LOSS_WEIGHT,
            compute_classification_metrics=cls.DEFAULT_COMPUTE_CLASSIFICATION_METRICS,
        )


# --- Moderations ---


@dataclass(slots=True)
class ModerationConfig(_WireConfig):
    input: str = ""

    @classmethod
    def default(cls) -> ModerationConfig:
        return cls()


type Config = (
    ChatConfig
    | ImageConfig
    | EmbeddingConfig
    | AudioConfig
    | FilesConfig
    | FineTuneConfig
    | ModerationConfig
)
