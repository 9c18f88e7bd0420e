"""
Main CLI entry point using Typer.

This module defines the command-line interface:
- `reflow-cli format` - Reflow a piece of text (argument, file or stdin)
- `reflow-cli chat` - Chat with Claude and see each reply reflowed
- `reflow-cli config` - Show current configuration
- `reflow-cli version` - Show version information

The CLI only orchestrates. Reflowing lives in reflow.py, the Claude
conversation in conversation.py and output rendering in formatters.py.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import anthropic
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import get_settings
from .conversation import ChatAssistant, ConversationError
from .formatters import format_as_json, format_as_text, format_for_speech
from .logging_config import setup_logging
from .models import ChatReply
from .reflow import append_confirmation, chat_style_format, trace_passes


# ============================================================================
# Error Handling Helper
# ============================================================================

def handle_api_error(error: Exception, console: Console) -> None:
    """
    Handle Anthropic API errors with user-friendly messages.

    Args:
        error: The exception that was raised
        console: Rich console for formatted output
    """
    if isinstance(error, anthropic.AuthenticationError):
        console.print(Panel(
            "[red bold]Authentication Error[/red bold]\n\n"
            "Your API key is invalid or has been revoked.\n\n"
            "[dim]To fix:[/dim]\n"
            "1. Check your API key at https://console.anthropic.com/settings/keys\n"
            "2. Update CHAT_REFLOW_ANTHROPIC_API_KEY in your .env file",
            border_style="red"
        ))

    elif isinstance(error, anthropic.RateLimitError):
        console.print(Panel(
            "[yellow bold]Rate Limited[/yellow bold]\n\n"
            "You've made too many requests. Please wait a moment.",
            border_style="yellow"
        ))

    elif isinstance(error, anthropic.APIConnectionError):
        console.print(Panel(
            "[red bold]Connection Error[/red bold]\n\n"
            "Could not connect to the Anthropic API.\n\n"
            "[dim]To fix:[/dim]\n"
            "1. Check your internet connection\n"
            "2. Try again in a few moments",
            border_style="red"
        ))

    elif isinstance(error, anthropic.APIStatusError):
        console.print(Panel(
            f"[red bold]API Error ({error.status_code})[/red bold]\n\n"
            f"{error.message}",
            border_style="red"
        ))

    else:
        console.print(f"[red bold]Unexpected Error:[/red bold] {error}")


# ============================================================================
# Create the Typer App
# ============================================================================

app = typer.Typer(
    name="reflow-cli",
    help="Reflow raw AI replies into short, readable chat text.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
# Diagnostics that must not mix with piped output
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    """Supported output formats for a reflowed reply."""
    TEXT = "text"
    JSON = "json"
    SPEECH = "speech"


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
) -> None:
    """Configure logging before any command runs."""
    try:
        level = "DEBUG" if verbose else get_settings().log_level
    except ValidationError:
        # Reported properly by the command that needs the settings
        level = "WARNING"
    setup_logging(level)


def _render(reply: ChatReply, output_format: OutputFormat) -> str:
    if output_format == OutputFormat.JSON:
        return format_as_json(reply)
    if output_format == OutputFormat.SPEECH:
        return "\n".join(format_for_speech(reply))
    return format_as_text(reply)


def _read_input(text: Optional[str], file: Optional[Path]) -> str:
    if text is not None and file is not None:
        console.print("[red]Error:[/red] Pass text or --file, not both.")
        raise typer.Exit(1)

    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Cannot read file:[/red] {e}")
            raise typer.Exit(1)

    if text is not None:
        return text

    stdin = typer.get_text_stream("stdin")
    if stdin.isatty():
        console.print("[red]Error:[/red] No input. Pass text, --file, or pipe text on stdin.")
        raise typer.Exit(1)
    return stdin.read()


# ============================================================================
# Main Command: format
# ============================================================================

@app.command(name="format")
def format_text(
    text: Annotated[
        Optional[str],
        typer.Argument(help="Raw reply text. Read from stdin if omitted.")
    ] = None,

    file: Annotated[
        Optional[Path],
        typer.Option("--file", "-i", help="Read the raw reply from a file.")
    ] = None,

    confirm: Annotated[
        Optional[str],
        typer.Option("--confirm", "-c", help="Confirmation prompt to append.")
    ] = None,

    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format.")
    ] = OutputFormat.TEXT,

    trace: Annotated[
        bool,
        typer.Option("--trace", "-t", help="Show the text after every pass.")
    ] = False,
) -> None:
    """
    Reflow raw AI text into short lines and blocks.

    \b
    Examples:
        reflow-cli format "Sure, here is the plan. First... "
        reflow-cli format -i reply.txt -c "Save this to your list?"
        cat reply.txt | reflow-cli format -f json
    """
    try:
        policy = get_settings().to_policy()
    except ValidationError as e:
        console.print(f"[red bold]Configuration Error:[/red bold] {e}")
        raise typer.Exit(1)

    raw = _read_input(text, file)

    if trace:
        table = Table(title="Reflow Passes", show_lines=True)
        table.add_column("#", style="dim")
        table.add_column("Pass", style="cyan")
        table.add_column("Output", style="white")
        for index, step in enumerate(trace_passes(raw, policy), start=1):
            table.add_row(str(index), step.name, Text(step.text))
        err_console.print(table)

    reply = ChatReply(
        raw=raw,
        text=append_confirmation(chat_style_format(raw, policy), confirm),
        confirmation=confirm or None,
    )

    # Plain echo: the output is meant to be piped, so no Rich wrapping
    typer.echo(_render(reply, output_format))


# ============================================================================
# Interactive Command: chat
# ============================================================================

@app.command()
def chat(
    confirm: Annotated[
        Optional[str],
        typer.Option("--confirm", "-c", help="Confirmation prompt appended to every reply.")
    ] = None,
) -> None:
    """
    Chat with Claude and see every reply reflowed.

    Type 'exit' or 'quit' to leave.
    """
    try:
        assistant = ChatAssistant()
    except (ValidationError, ConversationError) as e:
        console.print(f"[red bold]Configuration Error:[/red bold] {e}")
        raise typer.Exit(1)

    console.print(Panel(
        "[bold]Chat with the assistant.[/bold]\n\n"
        "Replies are reflowed into short lines before they are shown.\n"
        "Type [cyan]exit[/cyan] to leave.",
        title="Chat",
        border_style="blue"
    ))

    try:
        while True:
            message = Prompt.ask("\n[bold cyan]You[/bold cyan]")
            if message.strip().lower() in ("exit", "quit"):
                break
            if not message.strip():
                continue

            reply = assistant.send(message, confirmation=confirm)
            console.print(Panel(
                Text(reply.text),
                title="Assistant",
                border_style="green"
            ))

    except anthropic.APIError as e:
        handle_api_error(e, console)
        raise typer.Exit(1)

    except ConversationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Cancelled by user.[/yellow]")
        raise typer.Exit(130)


# ============================================================================
# Utility Commands
# ============================================================================

@app.command()
def config() -> None:
    """Show current configuration (API key is masked)."""
    try:
        settings = get_settings()
    except ValidationError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1)

    key_status = (
        f"{'*' * 20}... [green](set)[/green]"
        if settings.anthropic_api_key is not None
        else "[yellow](not set)[/yellow]"
    )
    console.print(Panel(
        f"[bold]Model:[/bold] {settings.model_name}\n"
        f"[bold]Max Tokens:[/bold] {settings.max_tokens}\n"
        f"[bold]API Key:[/bold] {key_status}\n"
        f"[bold]Log Level:[/bold] {settings.log_level}\n\n"
        f"[bold]Greeting Phrases:[/bold] {', '.join(settings.greeting_phrases)}\n"
        f"[bold]Comma Chunking:[/bold] >= {settings.comma_min_count} commas, "
        f"> {settings.comma_min_line_length} chars\n"
        f"[bold]Line Wrap:[/bold] > {settings.wrap_max_words} words, "
        f"split at {settings.wrap_min_split}-{settings.wrap_max_split}\n"
        f"[bold]Paragraph Lead:[/bold] {settings.paragraph_lead_sentences} sentences\n"
        f"[bold]Question Isolation:[/bold] >= {settings.question_isolation_min} questions",
        title="Current Configuration",
        border_style="green"
    ))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]reflow-cli[/bold] version {__version__}")


if __name__ == "__main__":
    app()
