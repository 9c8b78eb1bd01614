"""Typed clients for the OpenAI HTTP API."""

from aionic.openai._async_chat import AsyncChatClient
from aionic.openai._audio import AudioClient
from aionic.openai._base import BaseClient
from aionic.openai._chat import ChatClient
from aionic.openai._config import (
    AudioConfig,
    AudioResponseFormat,
    ChatConfig,
    Config,
    EmbeddingConfig,
    FilesConfig,
    FineTuneConfig,
    ImageConfig,
    ImageResponseFormat,
    ImageSize,
    ModerationConfig,
)
from aionic.openai._embeddings import EmbeddingClient
from aionic.openai._exceptions import (
    AionicError,
    APIError,
    MissingAPIKeyError,
    RateLimitError,
    RemoteError,
    ResponseFormatError,
    StreamDecodeError,
    ValidationError,
)
from aionic.openai._files import FilesClient
from aionic.openai._fine_tunes import FineTuneClient
from aionic.openai._image import ImageClient
from aionic.openai._moderations import ModerationClient
from aionic.openai._stream import StreamReassembler
from aionic.openai._types import (
    AudioResponse,
    ChatChoice,
    ChatResponse,
    Delta,
    DeleteResponse,
    EmbeddingData,
    EmbeddingInput,
    EmbeddingResponse,
    FileData,
    FileList,
    FineTuneEvent,
    FineTuneEventList,
    FineTuneList,
    FineTuneResponse,
    Function,
    FunctionCall,
    HyperParams,
    ImageData,
    ImageResponse,
    Message,
    MessageRole,
    Model,
    ModerationCategories,
    ModerationResponse,
    ModerationResult,
    ModerationScores,
    PromptCompletion,
    StreamedChoice,
    StreamedResponse,
    Usage,
)

__all__ = [
    "APIError",
    "AionicError",
    "AsyncChatClient",
    "AudioClient",
    "AudioConfig",
    "AudioResponse",
    "AudioResponseFormat",
    "BaseClient",
    "ChatChoice",
    "ChatClient",
    "ChatConfig",
    "ChatResponse",
    "Config",
    "DeleteResponse",
    "Delta",
    "EmbeddingClient",
    "EmbeddingConfig",
    "EmbeddingData",
    "EmbeddingInput",
    "EmbeddingResponse",
    "FileData",
    "FileList",
    "FilesClient",
    "FilesConfig",
    "FineTuneClient",
    "FineTuneConfig",
    "FineTuneEvent",
    "FineTuneEventList",
    "FineTuneList",
    "FineTuneResponse",
    "Function",
    "FunctionCall",
    "HyperParams",
    "ImageClient",
    "ImageConfig",
    "ImageData",
    "ImageResponse",
    "ImageResponseFormat",
    "ImageSize",
    "Message",
    "MessageRole",
    "MissingAPIKeyError",
    "Model",
    "ModerationCategories",
    "ModerationClient",
    "ModerationConfig",
    "ModerationResponse",
    "ModerationResult",
    "ModerationScores",
    "PromptCompletion",
    "RateLimitError",
    "RemoteError",
    "ResponseFormatError",
    "StreamDecodeError",
    "StreamReassembler",
    "StreamedChoice",
    "StreamedResponse",
    "Usage",
    "ValidationError",
]
