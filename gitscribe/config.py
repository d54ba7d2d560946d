"""Configuration types and defaults for gitscribe.

Configuration is loaded from ~/.config/gitscribe/config.yaml by
gitscribe.global_config. This module only defines the shapes and defaults.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LLMProvider(Enum):
    """Supported chat-completion providers.

    Every provider speaks the OpenAI-compatible `/chat/completions` API, so
    they differ only in their default base URL and API key variable.
    """

    OPENAI = "openai"
    GROQ = "groq"
    OPENROUTER = "openrouter"
    DEEPSEEK = "deepseek"
    CUSTOM = "custom"


class PromptVariant(Enum):
    """System prompt flavours."""

    PLAIN = "plain"
    RICH = "rich"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used when ~/.config/gitscribe/config.yaml leaves a key unset

DEFAULT_PROVIDER = LLMProvider.OPENAI
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_RETRIES = 2
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_DELAY = 1.0


DEFAULT_API_BASES = {
    LLMProvider.OPENAI: "https://api.openai.com/v1",
    LLMProvider.GROQ: "https://api.groq.com/openai/v1",
    LLMProvider.OPENROUTER: "https://openrouter.ai/api/v1",
    LLMProvider.DEEPSEEK: "https://api.deepseek.com/v1",
    LLMProvider.CUSTOM: None,
}


API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GROQ: "GROQ_API_KEY",
    LLMProvider.OPENROUTER: "OPENROUTER_API_KEY",
    LLMProvider.DEEPSEEK: "DEEPSEEK_API_KEY",
    LLMProvider.CUSTOM: "GITSCRIBE_API_KEY",
}


class ClientConfig(BaseModel):
    """Settings for one completion client.

    Frozen: a workflow run never changes its client settings.

    Attributes:
        provider: Which provider the settings belong to.
        api_base: Endpoint base URL; falls back to the provider default.
        api_key: Bearer token for the endpoint.
        model: Model name sent with every request.
        timeout: Per-attempt connect/read timeout in seconds.
        retries: Extra attempts after the first one fails.
        retry_delay: Base delay in seconds for linear backoff.
        proxy: Optional proxy URL for all requests.
        extra_headers: Additional HTTP headers sent with every request.
        temperature: Optional sampling temperature.
        debug: Log request and response metadata.
    """

    model_config = ConfigDict(frozen=True)

    provider: LLMProvider = DEFAULT_PROVIDER
    api_base: Optional[str] = None
    api_key: str
    model: str = DEFAULT_MODEL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    retries: int = Field(default=DEFAULT_RETRIES, ge=0)
    retry_delay: float = Field(default=DEFAULT_RETRY_DELAY, ge=0)
    proxy: Optional[str] = None
    extra_headers: dict[str, str] = Field(default_factory=dict)
    temperature: Optional[float] = None
    debug: bool = False

    @field_validator("api_key")
    @classmethod
    def api_key_must_not_be_empty(cls, v: str) -> str:
        """Ensure the API key is not blank."""
        if not v or not v.strip():
            raise ValueError("API key cannot be empty")
        return v.strip()

    @field_validator("proxy", "api_base")
    @classmethod
    def blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    def resolved_api_base(self) -> str:
        """Return the endpoint base URL without a trailing slash.

        Raises:
            ValueError: If neither an explicit base nor a provider default exists.
        """
        base = self.api_base or DEFAULT_API_BASES[self.provider]
        if not base:
            raise ValueError(f"No api_base configured for provider '{self.provider.value}'")
        return base.rstrip("/")
