"""Agent configuration with environment variable loading.

Pydantic-based configuration shared by the Markdown formatter and the
document chat. Supports OpenAI and OpenAI-compatible APIs via custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class AgentConfig(BaseModel):
    """Configuration for the LLM-backed collaborators.

    Attributes:
        api_key: API key for model access.
        base_url: API base URL (None for OpenAI default).
        formatter_model: Model used to turn extracted text into Markdown.
        chat_model: Model used to answer questions about the document.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in a generated response.
        num_history_runs: Previous chat turns replayed to the model on each message.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
        description="API key for LLM provider",
    )
    base_url: str | None = Field(
        default_factory=lambda: os.getenv("LLM_BASE_URL") or None,
        description="API base URL (None for OpenAI default)",
    )
    formatter_model: str = Field(
        default_factory=lambda: os.getenv("LLM_FORMATTER_MODEL", "gpt-4o"),
        description="Model used for Markdown conversion",
    )
    chat_model: str = Field(
        default_factory=lambda: os.getenv("LLM_CHAT_MODEL", "gpt-4o-mini"),
        description="Model used for document chat",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default=8192,
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )
    num_history_runs: int = Field(
        default=20,
        ge=1,
        description="Number of previous chat turns sent with each message",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env"
            )
        return v.strip()


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Raises:
        ValidationError: If no API key is set.
    """
    return AgentConfig()
