"""
gpt3-client: async client for the GPT-3 text-generation HTTP API.
"""

from gpt3_client.client import GPT3Client
from gpt3_client.config import (
    DEFAULT_ENGINE,
    ClientConfig,
    EmbeddingEngine,
    Engine,
    FilePurpose,
    load_config_from_env,
)
from gpt3_client.errors import (
    APIError,
    BodyReadError,
    ConfigurationError,
    DecodeError,
    EncodingError,
    GPT3Error,
    StreamReadError,
    TransportError,
)
from gpt3_client.models import (
    CompletionRequest,
    CompletionResponse,
    CompletionResponseChoice,
    EditsRequest,
    EditsResponse,
    EmbeddingsRequest,
    EmbeddingsResponse,
    EngineObject,
    EnginesResponse,
    FileDeleteResponse,
    FileUploadResponse,
    FineTuneOptions,
    FineTuneResponse,
    SearchRequest,
    SearchResponse,
)
from gpt3_client.transport import HTTPXTransport, Transport

__all__ = [
    "GPT3Client",
    "ClientConfig",
    "DEFAULT_ENGINE",
    "Engine",
    "EmbeddingEngine",
    "FilePurpose",
    "load_config_from_env",
    "GPT3Error",
    "APIError",
    "BodyReadError",
    "ConfigurationError",
    "DecodeError",
    "EncodingError",
    "StreamReadError",
    "TransportError",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionResponseChoice",
    "EditsRequest",
    "EditsResponse",
    "EmbeddingsRequest",
    "EmbeddingsResponse",
    "EngineObject",
    "EnginesResponse",
    "FileDeleteResponse",
    "FileUploadResponse",
    "FineTuneOptions",
    "FineTuneResponse",
    "SearchRequest",
    "SearchResponse",
    "HTTPXTransport",
    "Transport",
]
