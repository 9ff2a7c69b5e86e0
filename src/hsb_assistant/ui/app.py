"""Main Textual TUI application.

Hosts the chat widget: renders the controller's conversation, disables
input while a turn is in flight, and routes diagnostics to the log panel.
"""

import asyncio
import contextlib

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from ..chat import ConversationController, Message, TurnState
from ..content import ASSISTANT_NAME, DISCLAIMER, FIRM_NAME
from ..llm import LLMProvider
from .config import LogLevel
from .styles import APP_CSS
from .themes import HSB_NAVY
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class AssistantApp(App):
    """Textual TUI for the HSB chat assistant."""

    CSS = APP_CSS
    TITLE = ASSISTANT_NAME
    SUB_TITLE = FIRM_NAME

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_chat", "Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(self, provider: LLMProvider, log_level: str | None = None) -> None:
        super().__init__()
        self._provider = provider
        self._log_level = log_level
        self.controller = ConversationController(provider)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="chat-panel"):
            yield ChatHistoryWidget(id="chat-history")
            yield ChatInputBar(id="chat-input-bar")
            yield Static(DISCLAIMER, id="disclaimer")

        yield DebugPanel(id="debug-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(HSB_NAVY)
        self.theme = "hsb-navy"

        self.query_one("#chat-panel", Vertical).border_title = ASSISTANT_NAME

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._provider.set_debug_callback(self._route_debug)
        self.controller.set_debug_callback(self._route_debug)
        self.controller.add_listener(self._on_conversation_changed)
        self._on_conversation_changed(self.controller.messages, self.controller.state)

        model = getattr(self._provider, "model", "unknown")
        self.sub_title = f"{FIRM_NAME} | {model}"

        config = getattr(self._provider, "config", None)
        if config is not None and not config.is_configured:
            log_panel.warning("TUI", "API key not set; replies will use the contact fallback")

        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Cancel any in-flight turn when the app exits."""
        # Detach first: widgets may already be gone
        self.controller.remove_listener(self._on_conversation_changed)
        self.controller.set_debug_callback(None)
        self._provider.set_debug_callback(None)
        self.controller.cancel()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def _on_conversation_changed(self, messages: tuple[Message, ...], state: TurnState) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.sync(messages)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        input_bar.set_enabled(state is TurnState.IDLE)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self.controller.submit(event.value)

    def action_toggle_chat(self) -> None:
        """Close or reopen the chat panel.

        Closing cancels the in-flight turn; reopening shows the same
        conversation.
        """
        panel = self.query_one("#chat-panel", Vertical)
        if panel.display:
            if self.controller.cancel():
                self.notify("Response cancelled", severity="warning", timeout=2)
            panel.display = False
        else:
            panel.display = True
            self.query_one("#chat-history", ChatHistoryWidget).sync(self.controller.messages)
            self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(provider: LLMProvider, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        provider: Response stream client
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = AssistantApp(provider=provider, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(RuntimeError):
            await provider.close()
