"""Custom Textual widgets for the chat window.

Hides widget implementation details:
- Message bubble rendering and in-place updates while streaming
- Input history management and disabling during a turn
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat import Message, Role
from ..content import ASSISTANT_NAME
from .config import (
    INPUT_HISTORY_MAX_SIZE,
    INPUT_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    TYPING_INDICATOR,
    LogLevel,
)


class MessageBubble(Vertical):
    """One chat bubble, updated in place as its message grows.

    Clicking the bubble copies its text to the clipboard.
    """

    def __init__(self, message: Message, **kwargs) -> None:
        role_class = "user-message" if message.role is Role.USER else "assistant-message"
        super().__init__(classes=f"chat-message {role_class}", **kwargs)
        self.message_id = message.id
        self.message_role = message.role
        self._text = message.text
        self._is_error = message.is_error

        prefix = "You" if message.role is Role.USER else ASSISTANT_NAME
        timestamp = message.timestamp.strftime("%H:%M")
        self._header = Static(f"{prefix} · {timestamp}", classes="message-header", markup=False)
        self._content = Static(self._display_text(), classes="message-content", markup=False)
        self._update_classes()

    @property
    def message_text(self) -> str:
        return self._text

    def compose(self):
        yield self._header
        yield self._content

    def _display_text(self) -> str:
        if self.message_role is Role.ASSISTANT and not self._text:
            return TYPING_INDICATOR
        return self._text

    def _update_classes(self) -> None:
        self.set_class(self._is_error, "-error")
        self.set_class(self.message_role is Role.ASSISTANT and not self._text, "-pending")

    def refresh_from(self, message: Message) -> None:
        """Redraw if the message text or error flag changed."""
        if message.text == self._text and message.is_error == self._is_error:
            return
        self._text = message.text
        self._is_error = message.is_error
        self._content.update(self._display_text())
        self._update_classes()

    def on_click(self, event: Click) -> None:
        event.stop()
        if not self._text:
            return
        self.app.copy_to_clipboard(self._text)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history that mirrors the controller's conversation."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bubbles: dict[str, MessageBubble] = {}
        self._order: list[str] = []

    def sync(self, messages: tuple[Message, ...]) -> None:
        """Render new messages and update existing ones by id."""
        for message in messages:
            bubble = self._bubbles.get(message.id)
            if bubble is None:
                bubble = MessageBubble(message)
                self._bubbles[message.id] = bubble
                self._order.append(message.id)
                self.mount(bubble)
            else:
                bubble.refresh_from(message)

        self.border_subtitle = f"{len(self._order)} messages"
        self.scroll_end(animate=False)

    @property
    def bubbles(self) -> list[MessageBubble]:
        return [self._bubbles[message_id] for message_id in self._order]

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for bubble in reversed(self.bubbles):
            if bubble.message_role is Role.ASSISTANT and bubble.message_text:
                return bubble.message_text
        return None


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False, placeholder=INPUT_PLACEHOLDER)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="warning").with_tooltip(
            "Submit message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.focus()
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        last_row = len(lines) - 1
        last_col = len(lines[-1]) if lines else 0
        return text_area.cursor_location == (last_row, last_col)

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self.disabled:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if not value:
            return
        if not self._history or self._history[-1] != value:
            self._history.append(value)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        text_area.text = ""
        self.post_message(self.Submitted(value))

    def set_enabled(self, enabled: bool) -> None:
        """Enable or disable submission (disabled while a turn is in flight)."""
        self.disabled = not enabled
        self.set_class(not enabled, "-disabled")

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for diagnostics with level filtering.

    Shows timestamped log messages from the stream client and the
    conversation controller. Hidden by default, shown with --log-level
    or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Diagnostics"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        """Set log level threshold."""
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def write_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (LLM, Chat, TUI)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Chat": "green",
            "LLM": "magenta",
        }
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        line = Text.assemble(
            (f"{timestamp} ", "dim"),
            (f"{LogLevel.name(level):<5} ", level_color),
            (f"[{component}] ", comp_color),
            message,
        )
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.write_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.write_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.write_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.write_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
