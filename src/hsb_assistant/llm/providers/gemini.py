"""Google Gemini response stream client.

Uses the official Google GenAI SDK for async streaming generation.
Reference: https://github.com/googleapis/python-genai

Note: Gemini can emit chunks with no text (safety filtering, usage-only
final chunks). Those are dropped so callers only ever see non-empty
fragments.
"""

import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any

from google import genai
from google.genai import types

from ...config import AssistantConfig
from ...exceptions import AssistantUnconfiguredError, ResponseStreamError
from ..base import LLMProvider
from ..models import ChatMessage, StreamingResponse


class GeminiProvider(LLMProvider):
    """Google Gemini streaming provider.

    Hidden design decisions:
    - Google GenAI client initialization (skipped when no key is set)
    - Message format conversion
    - Per-fragment timeout
    - Upstream error details are logged, never raised
    """

    def __init__(self, config: AssistantConfig, client: Any | None = None):
        """Initialize Gemini provider.

        Args:
            config: Immutable assistant configuration
            client: Pre-built genai.Client (mainly for tests); built from
                config.api_key when omitted
        """
        self._config = config
        self._client = client
        if self._client is None and config.is_configured:
            self._client = genai.Client(api_key=config.api_key)

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._config.model

    @property
    def config(self) -> AssistantConfig:
        return self._config

    def build_request(self, message: str) -> list[ChatMessage]:
        """Build the single-turn request: system instruction plus the user message."""
        return [
            ChatMessage(role="system", content=self._config.system_instruction),
            ChatMessage(role="user", content=message),
        ]

    def _convert_messages(self, messages: list[ChatMessage]) -> tuple[str | None, list[types.Content]]:
        """Convert ChatMessage list to Gemini format.

        Args:
            messages: List of chat messages

        Returns:
            Tuple of (system_instruction, contents)
        """
        system_instruction = None
        contents = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            elif msg.role == "user":
                contents.append(types.Content(
                    role="user",
                    parts=[types.Part(text=msg.content)]
                ))

        return system_instruction, contents

    def _extract_content(self, response: Any) -> str:
        """Extract text content from a Gemini response chunk.

        Args:
            response: Gemini GenerateContentResponse

        Returns:
            Text content or empty string
        """
        if response.candidates and len(response.candidates) > 0:
            candidate = response.candidates[0]
            if candidate.content and candidate.content.parts:
                texts = [part.text for part in candidate.content.parts if getattr(part, "text", None)]
                if texts:
                    return "".join(texts)

        # Fallback to response.text (may raise or return None)
        try:
            return response.text or ""
        except (ValueError, AttributeError):
            return ""

    async def stream_reply(self, message: str) -> StreamingResponse:
        """Stream a reply to one user message using Google Gemini.

        Args:
            message: Non-empty user message

        Returns:
            StreamingResponse that yields text fragments and captures usage info

        Raises:
            ValueError: If message is empty
            AssistantUnconfiguredError: If no API key is configured
        """
        if not message.strip():
            raise ValueError("message must not be empty")

        if not self._config.is_configured or self._client is None:
            self._debug("warning", "LLM", "API key not configured; request skipped")
            raise AssistantUnconfiguredError()

        system_instruction, contents = self._convert_messages(self.build_request(message))
        config = types.GenerateContentConfig(
            temperature=self._config.temperature,
            system_instruction=system_instruction,
        )

        self._debug("debug", "LLM", f"Streaming from {self._config.model} ({len(message)} chars)")
        response: StreamingResponse = StreamingResponse(
            self._stream_generator(contents, config, on_usage=lambda usage: response.set_usage(usage))
        )
        return response

    async def _next_chunk(self, iterator: AsyncIterator[Any]) -> Any:
        return await asyncio.wait_for(iterator.__anext__(), timeout=self._config.stream_timeout)

    async def _stream_generator(
        self,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
        on_usage: Callable[[dict[str, Any]], None],
    ) -> AsyncIterator[str]:
        """Internal generator that yields text and captures usage from chunks."""
        usage = None
        fragments = 0

        try:
            stream = await asyncio.wait_for(
                self._client.aio.models.generate_content_stream(
                    model=self._config.model, contents=contents, config=config
                ),
                timeout=self._config.stream_timeout,
            )
            iterator = stream.__aiter__()
            while True:
                try:
                    chunk = await self._next_chunk(iterator)
                except StopAsyncIteration:
                    break

                # Usage metadata arrives on the final chunk
                if getattr(chunk, "usage_metadata", None):
                    usage = {
                        "prompt_tokens": chunk.usage_metadata.prompt_token_count or 0,
                        "completion_tokens": chunk.usage_metadata.candidates_token_count or 0,
                        "total_tokens": chunk.usage_metadata.total_token_count or 0,
                    }

                text = self._extract_content(chunk)
                if text:
                    fragments += 1
                    yield text
        except asyncio.TimeoutError:
            self._debug("error", "LLM", f"Gemini stream timed out after {self._config.stream_timeout}s")
            raise ResponseStreamError() from None
        except Exception as e:
            self._debug("error", "LLM", f"Gemini API error: {type(e).__name__}: {e}")
            raise ResponseStreamError() from None

        self._debug("info", "LLM", f"Stream complete ({fragments} fragments)")
        if usage:
            on_usage(usage)

    async def close(self) -> None:
        """Close the Gemini client.

        Note: The Google GenAI client doesn't require explicit closing,
        but we implement this for interface consistency.
        """
        pass
