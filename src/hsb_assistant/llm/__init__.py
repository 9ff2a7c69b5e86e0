from .base import DebugCallback, LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, StreamingResponse
from .providers import GeminiProvider

__all__ = [
    "DebugCallback",
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "StreamingResponse",
    "GeminiProvider",
]
