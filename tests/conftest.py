"""Pytest configuration and shared fixtures."""
import asyncio
import os
from types import SimpleNamespace

import pytest

from hsb_assistant.config import AssistantConfig
from hsb_assistant.exceptions import AssistantUnconfiguredError, ResponseStreamError
from hsb_assistant.llm import LLMProvider, StreamingResponse


class FakeProvider(LLMProvider):
    """Scripted stream client.

    Yields `fragments` in order. `fail_after=n` raises ResponseStreamError
    once n fragments have been delivered; `hold_at=n` blocks before the
    n-th fragment until `release` is set. `usage` is reported on the
    returned stream.
    """

    def __init__(
        self,
        fragments=(),
        fail_after: int | None = None,
        unconfigured: bool = False,
        hold_at: int | None = None,
        usage: dict | None = None,
    ):
        self.fragments = list(fragments)
        self.fail_after = fail_after
        self.unconfigured = unconfigured
        self.hold_at = hold_at
        self.usage = usage
        self.release = asyncio.Event()
        self.calls: list[str] = []
        self.closed = False

    async def stream_reply(self, message: str) -> StreamingResponse:
        if self.unconfigured:
            raise AssistantUnconfiguredError()
        self.calls.append(message)
        response = StreamingResponse(self._generate())
        if self.usage is not None:
            response.set_usage(self.usage)
        return response

    async def _generate(self):
        for index, fragment in enumerate(self.fragments):
            if self.fail_after is not None and index == self.fail_after:
                raise ResponseStreamError()
            if self.hold_at is not None and index == self.hold_at:
                await self.release.wait()
            yield fragment
        if self.fail_after is not None and self.fail_after >= len(self.fragments):
            raise ResponseStreamError()

    async def close(self) -> None:
        self.closed = True


class FakeModels:
    """Stand-in for `genai.Client().aio.models`."""

    def __init__(self, chunks=(), open_error: Exception | None = None, delay: float = 0.0):
        self.chunks = list(chunks)
        self.open_error = open_error
        self.delay = delay
        self.calls: list[dict] = []

    async def generate_content_stream(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.open_error is not None:
            raise self.open_error
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            if self.delay:
                await asyncio.sleep(self.delay)
            if isinstance(chunk, Exception):
                raise chunk
            yield chunk


def text_chunk(text):
    """A Gemini stream chunk carrying plain text."""
    return SimpleNamespace(candidates=None, text=text, usage_metadata=None)


def usage_chunk(prompt: int, completion: int):
    """A final Gemini chunk with usage metadata and no text."""
    return SimpleNamespace(
        candidates=None,
        text=None,
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt,
            candidates_token_count=completion,
            total_token_count=prompt + completion,
        ),
    )


@pytest.fixture
def make_provider():
    """Factory for scripted stream clients."""
    return FakeProvider


@pytest.fixture
def fake_genai():
    """Factory returning (client, models) for a fake Gemini SDK client."""
    def _make(chunks=(), open_error=None, delay=0.0):
        models = FakeModels(chunks, open_error=open_error, delay=delay)
        client = SimpleNamespace(aio=SimpleNamespace(models=models))
        return client, models
    return _make


@pytest.fixture
def config():
    """Configured assistant settings with a fake key."""
    return AssistantConfig(api_key="fake-key", stream_timeout=5.0)


@pytest.fixture
def unconfigured():
    """Assistant settings with no API key."""
    return AssistantConfig(api_key=None)


@pytest.fixture
def debug_log():
    """Collects (level, component, message) tuples from debug callbacks."""
    entries: list[tuple[str, str, str]] = []

    def _callback(level: str, component: str, message: str) -> None:
        entries.append((level, component, message))

    _callback.entries = entries
    return _callback


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("API_KEY") or os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def chunks():
    """Builders for fake Gemini chunks."""
    return SimpleNamespace(text=text_chunk, usage=usage_chunk)
