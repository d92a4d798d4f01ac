"""duet command line interface."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from .bootstrap import build_orchestrator
from .config import Settings, get_settings
from .errors import ConfigurationError, InvalidInputError
from .logging_utils import LogProfile, configure_logging
from .orchestrator import Orchestrator
from .types import ChatResult

EXIT_COMMANDS = {"exit", "quit", "q"}
RESET_COMMAND = "reset"

app = typer.Typer(
    name="duet",
    help="Plan, act, then speak.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _load_settings(max_turns: Optional[int] = None, *, profile: LogProfile = "default") -> Settings:
    overrides: dict[str, object] = {}
    if max_turns is not None:
        overrides["max_turns"] = max_turns
    settings = get_settings(**overrides)
    configure_logging(profile=profile, level=settings.log_level)
    return settings


def _create_orchestrator(settings: Settings) -> Orchestrator:
    try:
        return build_orchestrator(settings)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(1) from exc


def _render_result(result: ChatResult, *, show_observation: bool) -> None:
    style = "green" if result.ok else "red"
    console.print(Panel(Markdown(result.response), title="duet", title_align="left", border_style=style))
    if show_observation and result.observation:
        console.print(Panel(result.observation, title="observation", title_align="left", border_style="dim"))


@app.command("ask")
def ask(
    message: str = typer.Argument(..., help="Message to answer"),
    max_turns: Optional[int] = typer.Option(None, "--max-turns", help="Override the planner turn limit"),
    show_observation: bool = typer.Option(False, "--show-observation", help="Print the last action result"),
) -> None:
    """Answer one message and exit."""

    orchestrator = _create_orchestrator(_load_settings(max_turns))
    try:
        result = asyncio.run(orchestrator.chat(message))
    except InvalidInputError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(2) from exc

    _render_result(result, show_observation=show_observation)
    if not result.ok:
        raise typer.Exit(1)


@app.command("chat")
def chat(
    max_turns: Optional[int] = typer.Option(None, "--max-turns", help="Override the planner turn limit"),
    show_observation: bool = typer.Option(False, "--show-observation", help="Print the last action result"),
) -> None:
    """Start an interactive conversation; transcripts persist until reset."""

    settings = _load_settings(max_turns, profile="chat")
    orchestrator = _create_orchestrator(settings)
    console.print("[bold blue]duet[/bold blue] ready. Type 'reset' to start over or 'exit' to quit.")
    asyncio.run(_chat_loop(orchestrator, show_observation=show_observation))


async def _chat_loop(orchestrator: Orchestrator, *, show_observation: bool) -> None:
    while True:
        try:
            user_input = await asyncio.to_thread(console.input, "[bold cyan]you>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        command = user_input.strip().lower()
        if not command:
            continue
        if command in EXIT_COMMANDS:
            break
        if command == RESET_COMMAND:
            orchestrator.reset()
            console.print("[dim]Conversation reset.[/dim]")
            continue

        result = await orchestrator.chat(user_input)
        _render_result(result, show_observation=show_observation)


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Serve the chat and search HTTP API."""

    import uvicorn

    from .server import create_app

    try:
        http_app = create_app(_load_settings())
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(1) from exc
    uvicorn.run(http_app, host=host, port=port)
