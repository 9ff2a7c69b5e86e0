"""Terminal UI module for the assistant.

Provides a Textual-based chat widget around the conversation controller.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message bubbles, input bar, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- config.py: UI constants and log levels
- app.py: Application orchestration (user interaction flow)
"""

from .app import AssistantApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageBubble

__all__ = [
    "AssistantApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "MessageBubble",
    "run_textual_tui",
]
