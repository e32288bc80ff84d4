"""
Vaatsalya assistant CLI.

Usage:
    vaatsalya hypothesis --age 8 --challenge "..."   # Testable learning hypothesis
    vaatsalya stories                                # List bundled success stories
    vaatsalya discuss Nikolay                        # Moral lesson + discussion prompt
    vaatsalya chat                                   # Talk to the school assistant
    vaatsalya config                                 # Verify configuration
"""

import asyncio
import re
from collections.abc import Awaitable, Callable
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from vaatsalya import __version__
from vaatsalya.assistant import ChatSession, generate_discussion, generate_hypothesis
from vaatsalya.config import XDG_CONFIG_PATH, Settings, get_settings
from vaatsalya.content import STORIES, find_story
from vaatsalya.llm import GenerationFailure, GenerationOutcome, RetryClient, create_client
from vaatsalya.logging_config import setup_logging

console = Console()

app = typer.Typer(
    name="vaatsalya",
    help="Vaatsalya Community School AI assistant",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="markdown",
)

# Global state
state = {"verbose": False}

_TAG_RE = re.compile(r"<[^>]+>")


def _load_settings() -> Settings:
    """Load settings with a user-friendly error on failure."""
    try:
        settings = get_settings()
    except Exception as e:
        console.print(
            "[red]Configuration error.[/red] "
            "Check your config file or environment variables.\n"
        )
        for error in getattr(e, "errors", lambda: [])():
            loc = ".".join(str(part) for part in error["loc"])
            console.print(f"  [red]✗[/red] {loc}: {error['msg']}")
        if not getattr(e, "errors", None):
            console.print(f"  [red]✗[/red] {e}")
        console.print("\n[dim]Set GEMINI_API_KEY, then run 'vaatsalya config' to verify.[/dim]")
        raise typer.Exit(code=1) from None

    if not state["verbose"]:
        setup_logging(settings.log_level)
    return settings


def _make_client(settings: Settings) -> RetryClient:
    return create_client(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        max_attempts=settings.max_attempts,
    )


def _run_with_client(
    settings: Settings,
    call: Callable[[RetryClient], Awaitable[GenerationOutcome]],
    label: str,
) -> GenerationOutcome:
    """Run one generate call behind a spinner, closing the client afterwards."""

    async def runner() -> GenerationOutcome:
        async with _make_client(settings) as client:
            return await call(client)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(label, total=None)
        return asyncio.run(runner())


def _html_to_text(text: str) -> str:
    """Flatten the light HTML markup some prompts ask for."""
    text = re.sub(r"<br\s*/?>", "\n", text, flags=re.IGNORECASE)
    return _TAG_RE.sub("", text).strip()


def _print_outcome(outcome: GenerationOutcome, title: str, html: bool = False) -> None:
    """Render a generate outcome, exiting non-zero on failure."""
    if isinstance(outcome, GenerationFailure):
        console.print(f"[red]Error generating {title.lower()}:[/red] {outcome.message}")
        raise typer.Exit(code=1)

    if not outcome.text:
        console.print("[yellow]The model returned no content. Try again.[/yellow]")
        return

    body = _html_to_text(outcome.text) if html else outcome.text
    console.print(Panel(body, title=title, border_style="green"))
    for source in outcome.sources:
        console.print(f"  [dim]•[/dim] {source.title} [dim]({source.uri})[/dim]")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        print(f"Vaatsalya CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging output."
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit."
    ),
):
    """
    Vaatsalya Community School AI assistant
    """
    state["verbose"] = verbose
    setup_logging("DEBUG" if verbose else "INFO")


@app.command()
def hypothesis(
    age: int = typer.Option(..., "--age", "-a", help="Child's age in years"),
    challenge: str = typer.Option(..., "--challenge", "-c", help="Current learning challenge"),
) -> None:
    """Generate a testable learning hypothesis for a student challenge."""
    settings = _load_settings()
    if not challenge.strip():
        console.print("[red]Challenge cannot be empty[/red]")
        raise typer.Exit(code=1)

    outcome = _run_with_client(
        settings,
        lambda client: generate_hypothesis(client, age, challenge, model=settings.gemini_model),
        "Formulating hypothesis...",
    )
    _print_outcome(outcome, "Hypothesis")


@app.command()
def stories() -> None:
    """List the bundled student success stories."""
    table = Table(title="Success Stories")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Summary")
    for story in STORIES:
        table.add_row(str(story.id), story.name, story.summary)
    console.print(table)


@app.command()
def discuss(
    story_key: str = typer.Argument(..., metavar="STORY", help="Story name or id"),
) -> None:
    """Generate a moral lesson and discussion prompt for a success story."""
    story = find_story(story_key)
    if story is None:
        names = ", ".join(s.name for s in STORIES)
        console.print(f"[red]Unknown story '{story_key}'.[/red] Choose one of: {names}")
        raise typer.Exit(code=1)

    settings = _load_settings()
    outcome = _run_with_client(
        settings,
        lambda client: generate_discussion(client, story, model=settings.gemini_model),
        "Analyzing story...",
    )
    _print_outcome(outcome, f"Discussion: {story.name}", html=True)


@app.command()
def chat() -> None:
    """Chat with the school's educational assistant."""
    settings = _load_settings()
    console.print(Panel.fit(
        "[bold]AI Educational Assistant[/bold]\n"
        "Ask about progressive education, our scientific approach, or student well-being.\n"
        "[dim]/reset clears the conversation, /exit quits.[/dim]",
        border_style="blue",
    ))
    asyncio.run(_chat_loop(settings))


async def _chat_loop(settings: Settings) -> None:
    async with _make_client(settings) as client:
        session = ChatSession(client, model=settings.gemini_model)
        while True:
            try:
                message = console.input("[bold cyan]You[/bold cyan]: ").strip()
            except (EOFError, KeyboardInterrupt):
                console.print()
                return

            if not message:
                continue
            if message == "/exit":
                return
            if message == "/reset":
                session.reset()
                console.print("[dim]Conversation cleared.[/dim]")
                continue

            with console.status("Thinking..."):
                outcome = await session.send(message)

            if isinstance(outcome, GenerationFailure):
                console.print(f"[red]Error:[/red] {outcome.message}")
            elif outcome.text:
                console.print(f"[bold green]Assistant[/bold green]: {outcome.text}")
            else:
                console.print("[yellow]The assistant had nothing to say. Try rephrasing.[/yellow]")


@app.command()
def config() -> None:
    """Verify configuration and show settings."""
    console.print("[bold]Verifying configuration...[/bold]\n")

    console.print("[dim]Config search paths:[/dim]")
    xdg_config = XDG_CONFIG_PATH / "config.env"
    xdg_status = "[green](exists)[/green]" if xdg_config.exists() else "[dim](not found)[/dim]"
    console.print(f"  1. {xdg_config} {xdg_status}")
    local_env = Path(".env")
    local_status = "[green](exists)[/green]" if local_env.exists() else "[dim](not found)[/dim]"
    console.print(f"  2. {local_env.absolute()} {local_status}")
    console.print()

    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]✗[/red] Settings error: {e}")
        raise typer.Exit(code=1) from None

    console.print("[green]✓[/green] Settings loaded")
    console.print(f"  Gemini API key: {settings.masked_api_key}")
    console.print(f"  Model: {settings.gemini_model}")
    console.print(f"  Endpoint: {settings.gemini_base_url}")
    console.print(f"  Max attempts: {settings.max_attempts}")
    console.print(f"  Request timeout: {settings.request_timeout_seconds}s")


def cli() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    cli()
