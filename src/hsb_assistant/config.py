"""Assistant configuration.

Hides where settings come from (environment, .env file, defaults).
The resulting config is immutable and injected into the stream client.
"""

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .prompts import get_system_instruction

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_STREAM_TIMEOUT = 30.0


class AssistantConfig(BaseModel):
    """Settings for the remote text-generation endpoint."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, description="Gemini API key; None disables network access")
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model name")
    system_instruction: str = Field(
        default_factory=get_system_instruction,
        description="Persona and policy prompt sent with every request"
    )
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    stream_timeout: float = Field(
        default=DEFAULT_STREAM_TIMEOUT,
        gt=0,
        description="Seconds to wait for each fragment before failing"
    )

    @property
    def is_configured(self) -> bool:
        """True when a usable API key is present."""
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        """Build config from environment variables.

        Environment variables:
            API_KEY: Gemini API key (GEMINI_API_KEY is accepted as well)
            GEMINI_MODEL: Model name (default: gemini-2.5-flash)
            HSB_STREAM_TIMEOUT: Per-fragment timeout in seconds (default: 30)
        """
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            api_key=os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY"),
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            # Blank means unset
            stream_timeout=float(os.getenv("HSB_STREAM_TIMEOUT", "").strip() or DEFAULT_STREAM_TIMEOUT),
        )
