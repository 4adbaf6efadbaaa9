"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..conversation import ConversationLog
from ..session import RequestController
from ..ui.config import LogLevel
from ..ui.formatting import SanitizedMarkdown
from .providers import get_provider

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="pyagenda",
    help="Terminal chat assistant for task and goal management",
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


def _console_debug_callback(threshold: int):
    """Print controller diagnostics at or above the threshold."""
    def _callback(level: str, component: str, message: str) -> None:
        if LogLevel.from_string(level) < threshold:
            return
        style = _LEVEL_STYLES.get(level, "white")
        console.print(f"[{style}]{level.upper():<5}[/{style}] [bold]\\[{component}][/bold] {escape(message)}",
                      markup=True, highlight=False)
    return _callback


def _print_reply(controller: RequestController, before: int) -> bool:
    """Print the assistant reply appended since `before`, if any."""
    visible = controller.log.visible()
    if len(visible) <= before:
        return False
    reply = visible[-1]
    console.print("[bold green]Assistant:[/bold green]")
    console.print(SanitizedMarkdown(reply.content))
    console.print()
    return True


@app.command(name="tui")
def tui_command(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        provider = get_provider(console=console)
        try:
            async with provider:
                await run_textual_tui(provider=provider, log_level=log_level)
        finally:
            console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_tui())
    except KeyboardInterrupt:
        pass


@app.command()
def chat(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Minimum level of diagnostics to print: debug, info, warning, or error"
    ),
):
    """Interactive line-mode chat with the assistant."""
    async def _chat():
        provider = get_provider(console=console)
        controller = RequestController(ConversationLog(), provider)
        controller.set_debug_callback(_console_debug_callback(LogLevel.from_string(log_level)))

        console.print("[bold cyan]pyagenda Interactive Chat[/bold cyan]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        async with provider:
            while True:
                try:
                    user_input = await asyncio.to_thread(
                        console.input, "[bold yellow]You:[/bold yellow] "
                    )
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                if user_input.strip().lower() in ('exit', 'quit', 'q'):
                    console.print("[dim]Goodbye![/dim]")
                    break

                before = len(controller.log.visible()) + 1
                if not await controller.submit(user_input):
                    continue
                if not _print_reply(controller, before):
                    console.print("[dim]No reply. Your message is kept; try again.[/dim]\n")

    asyncio.run(_chat())


@app.command()
def ask(
    text: str = typer.Argument(..., help="Question or request for the assistant"),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Minimum level of diagnostics to print: debug, info, warning, or error"
    ),
):
    """Send one message and print the reply."""
    async def _ask() -> bool:
        provider = get_provider(console=console)
        controller = RequestController(ConversationLog(), provider)
        controller.set_debug_callback(_console_debug_callback(LogLevel.from_string(log_level)))
        async with provider:
            if not await controller.submit(text):
                console.print("[red]Error: message is empty[/red]")
                return False
            return _print_reply(controller, 1)

    if not asyncio.run(_ask()):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
