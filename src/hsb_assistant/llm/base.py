from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .models import StreamingResponse

# callback(level, component, message); level is 'debug', 'info', 'warning' or 'error'
DebugCallback = Callable[[str, str, str], None]


class LLMProvider(ABC):
    """Abstract base class for the assistant's response stream client.

    This module hides the design decision of which LLM provider answers
    the chat. Implementations must handle provider-specific details like:
    - API client setup and authentication
    - Request format conversion (system instruction + single user turn)
    - Translating upstream errors into ResponseStreamError

    Implementations perform no retries; retry policy belongs to the caller.

    Supports async context manager protocol for proper resource cleanup:
        async with provider:
            stream = await provider.stream_reply("Hello")
    """

    _debug_callback: DebugCallback | None = None

    @abstractmethod
    async def stream_reply(self, message: str) -> StreamingResponse:
        """Request a streamed reply to a single user message.

        Args:
            message: Non-empty user message

        Returns:
            StreamingResponse yielding non-empty text fragments in arrival order

        Raises:
            AssistantUnconfiguredError: If no credential is configured
                (raised before any network access)
            ResponseStreamError: Raised while iterating if the transport or
                service fails
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for diagnostics logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        """Send a debug log message if callback is set."""
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def __aenter__(self) -> "LLMProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
