"""Conversation controller.

Mediates between user submissions and the response stream client:
owns the conversation, applies streamed fragments to the in-flight
assistant message, and turns every failure into a fallback bubble.

Single-writer discipline: only the controller (running on the event
loop) mutates messages, and at most one turn is in flight.
"""

import asyncio
from collections.abc import Callable

from ..content import GENERIC_FALLBACK, GREETING, INTERRUPTED_TEXT, UNCONFIGURED_FALLBACK
from ..exceptions import AssistantUnconfiguredError
from ..llm import DebugCallback, LLMProvider, StreamingResponse
from .models import Conversation, Message, Role, TurnState

# listener(messages, state), called on every observable change
ConversationListener = Callable[[tuple[Message, ...], TurnState], None]


class ConversationController:
    """Drives chat turns against an LLM provider.

    Usage:
        controller = ConversationController(provider)
        controller.add_listener(render)
        placeholder = await controller.ask("What services do you offer?")
    """

    def __init__(self, provider: LLMProvider, greeting: str = GREETING) -> None:
        self._provider = provider
        self._conversation = Conversation(greeting)
        self._state = TurnState.IDLE
        self._listeners: list[ConversationListener] = []
        self._debug_callback: DebugCallback | None = None
        self._task: asyncio.Task | None = None
        self._placeholder: Message | None = None
        # Bumped on cancel so a stale turn can't touch the conversation
        self._generation = 0

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._conversation.snapshot()

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_loading(self) -> bool:
        """True while a turn is in flight and submissions are refused."""
        return self._state is not TurnState.IDLE

    def add_listener(self, listener: ConversationListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: ConversationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for turn lifecycle logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def _publish(self) -> None:
        snapshot = self._conversation.snapshot()
        for listener in list(self._listeners):
            # A broken listener must not fail the turn
            try:
                listener(snapshot, self._state)
            except Exception as e:
                self._debug("error", "Chat", f"Listener failed: {type(e).__name__}: {e}")

    def _set_state(self, state: TurnState) -> None:
        self._state = state
        self._publish()

    def submit(self, text: str) -> Message | None:
        """Start a turn for `text`.

        Appends the user message and an empty assistant placeholder
        synchronously, then streams the reply in a background task.
        Must be called from within a running event loop.

        Returns:
            The placeholder assistant message, or None if the submission
            was rejected (blank input, or a turn is already in flight)
        """
        user_text = text.strip()
        if not user_text:
            return None
        if self.is_loading:
            self._debug("debug", "Chat", "Submission ignored: turn in flight")
            return None

        loop = asyncio.get_running_loop()

        self._state = TurnState.SUBMITTING
        self._conversation.append(Message(role=Role.USER, text=user_text))
        placeholder = self._conversation.append(Message(role=Role.ASSISTANT))
        self._placeholder = placeholder
        self._publish()

        self._debug("info", "Chat", f"Turn started: '{user_text[:50]}'")
        self._task = loop.create_task(self._run_turn(self._generation, placeholder, user_text))
        return placeholder

    async def ask(self, text: str) -> Message | None:
        """Submit `text` and wait for the turn to finish.

        Returns:
            The finished assistant message, or None if rejected
        """
        placeholder = self.submit(text)
        if placeholder is None:
            return None
        await self.wait()
        return placeholder

    async def wait(self) -> None:
        """Wait for the in-flight turn, if any, to terminate."""
        task = self._task
        if task is not None:
            # asyncio.wait doesn't raise if the turn itself gets cancelled
            await asyncio.wait({task})

    def cancel(self) -> bool:
        """Abort the in-flight turn.

        The placeholder keeps whatever text already arrived (or an
        interruption note if none did); later fragments are discarded.

        Returns:
            True if a turn was cancelled
        """
        task = self._task
        if task is None or task.done():
            return False

        self._generation += 1
        task.cancel()
        self._task = None

        placeholder = self._placeholder
        self._placeholder = None
        if placeholder is not None and not placeholder.text:
            placeholder.replace(INTERRUPTED_TEXT)

        self._debug("info", "Chat", "Turn cancelled")
        self._set_state(TurnState.IDLE)
        return True

    async def _run_turn(self, generation: int, placeholder: Message, text: str) -> None:
        self._set_state(TurnState.STREAMING)
        stream: StreamingResponse | None = None
        try:
            stream = await self._provider.stream_reply(text)
            async for fragment in stream:
                if generation != self._generation:
                    break
                if not fragment:
                    continue
                placeholder.append(fragment)
                self._publish()
        except AssistantUnconfiguredError:
            self._debug("warning", "Chat", "Assistant not configured; showing contact fallback")
            self._fail(generation, placeholder, UNCONFIGURED_FALLBACK)
        except Exception as e:
            self._debug("error", "Chat", f"Turn failed: {e}")
            self._fail(generation, placeholder, GENERIC_FALLBACK)
        finally:
            if stream is not None:
                await stream.aclose()
            if generation == self._generation:
                self._task = None
                self._placeholder = None
                self._set_state(TurnState.IDLE)
                usage = stream.usage if stream is not None else None
                if usage:
                    self._debug("info", "Chat", f"Turn finished ({usage['total_tokens']} tokens)")
                else:
                    self._debug("debug", "Chat", "Turn finished")

    def _fail(self, generation: int, placeholder: Message, fallback: str) -> None:
        if generation != self._generation:
            return
        # Overwrite, never append: partial fragments must not survive
        placeholder.replace(fallback, is_error=True)
        self._set_state(TurnState.ERROR)
