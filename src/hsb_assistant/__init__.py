"""
HSB Assistant: the HSB Accounting & Finance chat assistant.

A streaming Gemini client and a conversation controller, wrapped in a
Textual chat widget and a Typer CLI. Each module hides one design
decision (provider, conversation state, presentation).
"""

__version__ = "0.1.0"

from .chat import ConversationController, Message, Role, TurnState
from .config import AssistantConfig
from .exceptions import AssistantError, AssistantUnconfiguredError, ResponseStreamError
from .llm import GeminiProvider, LLMProvider, create_llm_provider

__all__ = [
    "AssistantConfig",
    "AssistantError",
    "AssistantUnconfiguredError",
    "ConversationController",
    "GeminiProvider",
    "LLMProvider",
    "Message",
    "ResponseStreamError",
    "Role",
    "TurnState",
    "create_llm_provider",
]
