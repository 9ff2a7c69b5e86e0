from collections.abc import AsyncIterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StreamingResponse:
    """Wrapper for streaming LLM responses that captures usage info.

    Acts as an async iterator for text fragments while storing token usage
    that becomes available at the end of the stream. A response is
    single-use: once exhausted or closed, issue a new request.

    Usage:
        stream = await provider.stream_reply("What services do you offer?")
        async for fragment in stream:
            print(fragment, end="")
        print(stream.usage)
    """

    def __init__(self, async_iter: AsyncIterator[str]):
        """Initialize with an async iterator of text fragments.

        Args:
            async_iter: Async iterator yielding text fragments
        """
        self._iter = async_iter
        self._usage: dict[str, Any] | None = None

    @property
    def usage(self) -> dict[str, Any] | None:
        """Get token usage info (available after iteration completes)."""
        return self._usage

    def set_usage(self, usage: dict[str, Any]) -> None:
        """Set token usage info (called by provider at end of stream)."""
        self._usage = usage

    def __aiter__(self) -> "StreamingResponse":
        """Return self as async iterator."""
        return self

    async def __anext__(self) -> str:
        """Get next fragment from the underlying iterator."""
        return await self._iter.__anext__()

    async def aclose(self) -> None:
        """Release the underlying stream if it is still open."""
        aclose = getattr(self._iter, "aclose", None)
        if aclose is not None:
            await aclose()


class ChatMessage(BaseModel):
    """A single message in an outgoing model request."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'system'")
    content: str = Field(description="Content of the message")
