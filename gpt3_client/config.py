"""
Configuration constants, engine names and the client configuration model.
"""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from gpt3_client.errors import ConfigurationError


# ─────────────────────────────────────────────────────────────────────
# ENGINES
# ─────────────────────────────────────────────────────────────────────

class Engine(str, Enum):
    """Completion and search engines."""
    TEXT_ADA_001 = "text-ada-001"
    TEXT_BABBAGE_001 = "text-babbage-001"
    TEXT_CURIE_001 = "text-curie-001"
    TEXT_DAVINCI_001 = "text-davinci-001"
    ADA = "ada"
    BABBAGE = "babbage"
    CURIE = "curie"
    DAVINCI = "davinci"

    def __str__(self) -> str:
        return self.value


class EmbeddingEngine(str, Enum):
    """Models accepted by the embeddings endpoint."""
    TEXT_SIMILARITY_ADA_001 = "text-similarity-ada-001"
    TEXT_SIMILARITY_BABBAGE_001 = "text-similarity-babbage-001"
    TEXT_SIMILARITY_CURIE_001 = "text-similarity-curie-001"
    TEXT_SIMILARITY_DAVINCI_001 = "text-similarity-davinci-001"
    TEXT_SEARCH_ADA_DOC_001 = "text-search-ada-doc-001"
    TEXT_SEARCH_ADA_QUERY_001 = "text-search-ada-query-001"
    CODE_SEARCH_ADA_CODE_001 = "code-search-ada-code-001"
    CODE_SEARCH_ADA_TEXT_001 = "code-search-ada-text-001"

    def __str__(self) -> str:
        return self.value


class FilePurpose(str, Enum):
    """Intended use of an uploaded file."""
    FINE_TUNE = "fine-tune"
    SEARCH = "search"
    ANSWERS = "answers"
    CLASSIFICATIONS = "classifications"

    def __str__(self) -> str:
        return self.value


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

DEFAULT_ENGINE: Engine = Engine.DAVINCI
DEFAULT_BASE_URL: str = "https://api.openai.com/v1"
DEFAULT_USER_AGENT: str = "gpt3-client"
DEFAULT_TIMEOUT_SECONDS: float = 30.0

ORGANIZATION_HEADER: str = "OpenAI-Organization"


# ─────────────────────────────────────────────────────────────────────
# CLIENT CONFIGURATION
# ─────────────────────────────────────────────────────────────────────

class ClientConfig(BaseModel):
    """
    Immutable settings shared by every call a client makes.

    Safe to share across concurrent calls: nothing here changes after
    construction.
    """
    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    organization: str = ""
    default_engine: str = DEFAULT_ENGINE.value
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        if not value:
            raise ValueError("API key required")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("default_engine", mode="before")
    @classmethod
    def _engine_value(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_api_key() -> Optional[str]:
    """Get API key from OPENAI_API_KEY."""
    return os.environ.get("OPENAI_API_KEY")


def get_organization() -> str:
    """Get organization id from OPENAI_ORGANIZATION (default: none)."""
    return os.environ.get("OPENAI_ORGANIZATION", "").strip()


def get_base_url() -> str:
    """Get API base URL from OPENAI_BASE_URL."""
    return os.environ.get("OPENAI_BASE_URL", "").strip() or DEFAULT_BASE_URL


def get_default_engine() -> str:
    """Get default engine from GPT3_DEFAULT_ENGINE (default: davinci)."""
    return os.environ.get("GPT3_DEFAULT_ENGINE", "").strip() or DEFAULT_ENGINE.value


def get_user_agent() -> str:
    """Get User-Agent from GPT3_USER_AGENT."""
    return os.environ.get("GPT3_USER_AGENT", "").strip() or DEFAULT_USER_AGENT


def get_timeout_seconds() -> float:
    """
    Get request timeout from GPT3_TIMEOUT_SECONDS (default: 30).

    Raises:
        ConfigurationError: If the variable is set but not a number
    """
    raw = os.environ.get("GPT3_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(
            f"GPT3_TIMEOUT_SECONDS must be a number, got {raw!r}"
        ) from None


def load_config_from_env(api_key: Optional[str] = None) -> ClientConfig:
    """
    Build a ClientConfig from environment variables.

    Loads a .env file first if one is present. An explicit api_key wins
    over OPENAI_API_KEY.

    Raises:
        ConfigurationError: If no API key is available or a value is invalid
    """
    from dotenv import load_dotenv
    load_dotenv()

    key = api_key or get_api_key()
    if not key:
        raise ConfigurationError(
            "API key required. "
            "Provide api_key parameter or set OPENAI_API_KEY environment variable."
        )
    return ClientConfig(
        api_key=key,
        base_url=get_base_url(),
        organization=get_organization(),
        default_engine=get_default_engine(),
        timeout_seconds=get_timeout_seconds(),
        user_agent=get_user_agent(),
    )
