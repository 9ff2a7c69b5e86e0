"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.table import Table

from ..chat import ConversationController, Message, Role, TurnState
from ..content import (
    ASSISTANT_NAME,
    BOOKING_URL,
    EMAIL,
    FIRM_NAME,
    OFFICE_ADDRESS,
    PHONE,
    SERVICES,
)
from ..llm import LLMProvider
from .providers import get_llm

# Create Typer app
app = typer.Typer(
    name="hsb-assistant",
    help="HSB Accounting & Finance chat assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}
_LEVEL_ORDER = ["debug", "info", "warning", "error"]


def _console_debug_callback(threshold: str):
    """Build a debug callback that prints entries at or above `threshold`."""
    minimum = _LEVEL_ORDER.index(threshold) if threshold in _LEVEL_ORDER else 0

    def _callback(level: str, component: str, message: str) -> None:
        if level in _LEVEL_ORDER and _LEVEL_ORDER.index(level) < minimum:
            return
        style = _LEVEL_STYLES.get(level, "white")
        console.print(f"[{style}]{level.upper():<7}[/] [bold]{component}[/]: ", end="")
        console.print(message, markup=False, highlight=False, soft_wrap=True)

    return _callback


class _ConsoleRenderer:
    """Prints the in-flight assistant message as fragments arrive."""

    def __init__(self) -> None:
        self._printed = 0

    @property
    def printed(self) -> int:
        return self._printed

    def reset(self) -> None:
        self._printed = 0

    def __call__(self, messages: tuple[Message, ...], state: TurnState) -> None:
        last = messages[-1]
        if last.role is not Role.ASSISTANT or state is not TurnState.STREAMING:
            return
        console.print(last.text[self._printed:], end="", markup=False, highlight=False, soft_wrap=True)
        self._printed = len(last.text)


async def _run_turn(controller: ConversationController, renderer: _ConsoleRenderer, text: str) -> None:
    renderer.reset()
    console.print(f"[bold yellow]{ASSISTANT_NAME}:[/bold yellow] ", end="")
    reply = await controller.ask(text)
    if reply is None:
        console.print()
        return
    if reply.is_error:
        if renderer.printed:
            # Partial text already on screen; the fallback replaces it
            console.print()
        console.print(reply.text, style="red", markup=False, highlight=False, soft_wrap=True)
    else:
        console.print()


def _make_controller(llm: LLMProvider, log_level: str | None) -> tuple[ConversationController, _ConsoleRenderer]:
    controller = ConversationController(llm)
    renderer = _ConsoleRenderer()
    controller.add_listener(renderer)
    if log_level is not None:
        callback = _console_debug_callback(log_level.lower())
        llm.set_debug_callback(callback)
        controller.set_debug_callback(callback)
    return controller, renderer


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the assistant"),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print diagnostics at this level (debug, info, warning, error)"
    ),
):
    """Ask a single question and stream the reply."""
    async def _ask():
        llm = get_llm(console)
        controller, renderer = _make_controller(llm, log_level)
        try:
            await _run_turn(controller, renderer, question)
        finally:
            await llm.close()

    if not question.strip():
        console.print("[dim]Nothing to ask.[/dim]")
        return
    asyncio.run(_ask())


@app.command()
def chat(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Print diagnostics at this level (debug, info, warning, error)"
    ),
):
    """Interactive line-mode chat in the terminal."""
    async def _chat():
        llm = get_llm(console)
        controller, renderer = _make_controller(llm, log_level)

        console.print(f"[bold cyan]{ASSISTANT_NAME}[/bold cyan]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")
        console.print(f"[bold yellow]{ASSISTANT_NAME}:[/bold yellow] {controller.messages[0].text}\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold green]You:[/bold green] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if not user_input.strip():
                    continue
                if user_input.strip().lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break

                await _run_turn(controller, renderer, user_input)
                console.print()
        finally:
            await llm.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel at this level (debug, info, warning, error)"
    ),
):
    """Launch the chat widget as a terminal UI."""
    async def _tui():
        from ..ui import run_textual_tui

        llm = get_llm(console)
        await run_textual_tui(llm, log_level=log_level)

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def info():
    """Show contact details and services."""
    table = Table(title=FIRM_NAME, show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Phone", PHONE)
    table.add_row("Email", EMAIL)
    table.add_row("Office", OFFICE_ADDRESS)
    table.add_row("Book a call", BOOKING_URL)
    table.add_row("Services", ", ".join(SERVICES))
    console.print(table)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
