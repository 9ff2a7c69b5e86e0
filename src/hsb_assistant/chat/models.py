"""Data models for the conversation.

Hides the internal representation of chat messages and the
append-only conversation they live in.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class Role(str, Enum):
    """Sender of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class TurnState(str, Enum):
    """Where the controller is within the current turn."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    STREAMING = "streaming"
    ERROR = "error"


@dataclass(eq=False)
class Message:
    """A chat message.

    `id` and `role` are fixed at creation; `text` and `is_error` are
    mutated in place by the controller while the turn is in flight.
    """

    role: Role
    text: str = ""
    is_error: bool = False
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def append(self, fragment: str) -> None:
        self.text += fragment

    def replace(self, text: str, is_error: bool = False) -> None:
        self.text = text
        self.is_error = is_error


class Conversation:
    """Ordered, append-only list of messages, seeded with a greeting."""

    def __init__(self, greeting: str) -> None:
        self._messages: list[Message] = [Message(role=Role.ASSISTANT, text=greeting)]
        self._ids: set[str] = {m.id for m in self._messages}

    def append(self, message: Message) -> Message:
        if message.id in self._ids:
            raise ValueError(f"Duplicate message id: {message.id}")
        self._messages.append(message)
        self._ids.add(message.id)
        return message

    def snapshot(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
