"""Shaken command line interface."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from shaken.bot import Bot
from shaken.bus import MessageBus
from shaken.channels import ChannelManager, ConsoleChannel, ConsoleConfig
from shaken.config import load_settings
from shaken.core import DEFAULT_LEADER, Matched, MissingRequired, build_schema
from shaken.errors import SchemaError
from shaken.logging_utils import configure_logging

app = typer.Typer(name="shaken", help="A small chat bot with a command grammar.", add_completion=False)
console = Console()


@app.command()
def run(
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Directory holding .env and the store"),
    sender: str = typer.Option("console_user", help="User name for typed messages"),
    channel: str | None = typer.Option(None, help="Channel name; defaults to the first configured channel"),
    elevated: bool = typer.Option(False, "--elevated", help="Send messages as the broadcaster"),
) -> None:
    """Chat with the bot on stdin."""
    settings = load_settings(workspace or Path.cwd())
    configure_logging(profile="chat", level=settings.log_level)

    config = ConsoleConfig(
        channel=channel or (settings.channels[0] if settings.channels else "#console"),
        sender=sender,
        badges=frozenset({"broadcaster"}) if elevated else frozenset(),
    )
    asyncio.run(_serve(Bot(settings), config))


async def _serve(bot: Bot, config: ConsoleConfig) -> None:
    bus = MessageBus()
    manager = ChannelManager(bus, bot)
    manager.register(ConsoleChannel(bus, config))
    await manager.start()
    try:
        await manager.wait()
    finally:
        await manager.stop()


@app.command()
def check(
    help_text: str = typer.Argument(..., help="Example usage, e.g. '!hello <name> <rest...>'"),
    leader: str = typer.Option(DEFAULT_LEADER, help="Command leader character"),
) -> None:
    """Validate a command help string and show its slots."""
    try:
        schema = build_schema(help_text, leader)
    except SchemaError as exc:
        console.print(f"[red]invalid:[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(f"command: [bold]{schema.name}[/bold]")
    for slot in schema.argument_slots:
        console.print(f"  {slot.key}: {slot.kind.value}")


@app.command()
def extract(
    help_text: str = typer.Argument(..., help="Example usage of the command"),
    line: str = typer.Argument(..., help="Input line to match"),
    leader: str = typer.Option(DEFAULT_LEADER, help="Command leader character"),
) -> None:
    """Match a line against a command and print the bound arguments."""
    try:
        schema = build_schema(help_text, leader)
    except SchemaError as exc:
        console.print(f"[red]invalid:[/red] {exc}")
        raise typer.Exit(1) from exc

    match schema.extract(line):
        case Matched(mapping=mapping):
            console.print("matched")
            for key, value in mapping.items():
                console.print(f"  {key} = {value!r}", markup=False)
        case MissingRequired():
            console.print(f"missing arguments, usage: {schema.help_text}", markup=False)
        case _:
            console.print("no match")
            raise typer.Exit(2)
