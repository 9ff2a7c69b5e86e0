"""Conversation state and turn handling for the chat widget."""

from .controller import ConversationController, ConversationListener
from .models import Conversation, Message, Role, TurnState

__all__ = [
    "Conversation",
    "ConversationController",
    "ConversationListener",
    "Message",
    "Role",
    "TurnState",
]
