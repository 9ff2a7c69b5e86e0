"""Provider factory functions for CLI.

Centralizes creation of the config and stream client from environment
variables. Hides configuration details from command implementations.
"""

from rich.console import Console

from ..config import AssistantConfig
from ..llm import LLMProvider, create_llm_provider

# Default console for output
_console = Console()


def get_config() -> AssistantConfig:
    """Create the assistant config from environment variables.

    Environment variables:
        API_KEY / GEMINI_API_KEY: Gemini API key (optional)
        GEMINI_MODEL: Gemini model (default: gemini-2.5-flash)
        HSB_STREAM_TIMEOUT: Per-fragment timeout in seconds (default: 30)
    """
    return AssistantConfig.from_env()


def get_llm(console: Console | None = None) -> LLMProvider:
    """Create the Gemini stream client from environment variables.

    A missing API key is not fatal: the assistant still runs and answers
    with the contact fallback.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance
    """
    con = console or _console
    config = get_config()
    if not config.is_configured:
        con.print("[yellow]Warning: API_KEY not set, replies will use the contact fallback[/yellow]")
    return create_llm_provider("gemini", config)
