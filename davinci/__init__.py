"""Client for the OpenAI text-davinci completion endpoint."""

from .client import COMPLETIONS_URL, CompletionClient, complete
from .config import ClientConfig, SamplingConfig, load_api_key, load_config
from .errors import (
    ApiStatusError,
    AuthenticationError,
    CompletionError,
    EmptyChoicesError,
    MalformedResponseError,
    TransportError,
)
from .prompt import build_prompt
from .response import (
    ApiErrorBody,
    CompletionChoice,
    CompletionRequest,
    CompletionResponse,
    UsageStats,
)

__all__ = [
    "COMPLETIONS_URL",
    "CompletionClient",
    "complete",
    "ClientConfig",
    "SamplingConfig",
    "load_api_key",
    "load_config",
    "CompletionError",
    "TransportError",
    "ApiStatusError",
    "AuthenticationError",
    "MalformedResponseError",
    "EmptyChoicesError",
    "build_prompt",
    "ApiErrorBody",
    "CompletionChoice",
    "CompletionRequest",
    "CompletionResponse",
    "UsageStats",
]
