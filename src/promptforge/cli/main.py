"""CLI entry point for prompt-forge.

Invoked as::

    prompt-forge [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m promptforge

Commands
--------
serve         Run the JSON-RPC server on stdin/stdout
agents        List agents from the configured records
tools         List the tools the server exposes
compose       Print the composed prompt for one agent
instructions  Print all enabled instructions, highest priority first
version       Show version information
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, Callable

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

if TYPE_CHECKING:
    from promptforge.config import ServerConfig
    from promptforge.snapshot import Snapshot

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Send all log records to stderr through rich; stdout is the protocol channel."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def _resolve_config(
    db: str | None,
    data: str | None,
    log_level: str | None,
    default_log_level: str = "WARNING",
) -> "ServerConfig":
    from promptforge.config import ServerConfig

    try:
        config = ServerConfig.resolve(
            db_path=db,
            data_path=data,
            log_level=log_level,
            default_log_level=default_log_level,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="'--log-level'") from exc
    configure_logging(config.log_level)
    return config


def _load_snapshot_or_exit(config: "ServerConfig") -> "Snapshot":
    """Load records once for an offline command, exiting on failure."""
    from promptforge.snapshot import SnapshotStore

    try:
        provider = config.create_provider()
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    store = SnapshotStore(provider)
    if not store.refresh():
        err_console.print(f"[red]Error:[/red] Could not load records from {provider!r}")
        sys.exit(1)
    return store.current


def _source_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared ``--db``/``--data``/``--log-level`` options."""
    func = click.option(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Env: PROMPT_FORGE_LOG_LEVEL",
    )(func)
    func = click.option(
        "--data",
        type=click.Path(dir_okay=False),
        default=None,
        help="JSON or YAML records file. Env: PROMPT_FORGE_DATA",
    )(func)
    func = click.option(
        "--db",
        type=click.Path(dir_okay=False),
        default=None,
        help="Prompt Forge SQLite database. Env: PROMPT_FORGE_DB",
    )(func)
    return func


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="prompt-forge")
def cli() -> None:
    """Prompt Forge: serve agents, skills and instructions to assistants over JSON-RPC."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from promptforge import __version__
    from promptforge.protocol import PROTOCOL_VERSION

    table = Table(show_header=False, box=None)
    table.add_row("[bold]prompt-forge[/bold]", f"v{__version__}")
    table.add_row("Protocol", PROTOCOL_VERSION)
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# serve command
# ---------------------------------------------------------------------------


@cli.command(name="serve")
@_source_options
def serve_command(db: str | None, data: str | None, log_level: str | None) -> None:
    """Run the JSON-RPC server on stdin/stdout until input ends."""
    from promptforge.server import build_server

    config = _resolve_config(db, data, log_level, default_log_level="INFO")
    try:
        provider = config.create_provider()
    except ValueError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    server = build_server(provider)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    except OSError as exc:
        err_console.print(f"[red]Transport error:[/red] {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# agents command
# ---------------------------------------------------------------------------


@cli.command(name="agents")
@_source_options
def agents_command(db: str | None, data: str | None, log_level: str | None) -> None:
    """List agents from the configured records."""
    snapshot = _load_snapshot_or_exit(_resolve_config(db, data, log_level))

    if not snapshot.agents:
        console.print("[yellow]No agents configured.[/yellow]")
        return

    table = Table(title="Agents", show_lines=True)
    table.add_column("ID", style="bold", min_width=10)
    table.add_column("Name", min_width=10)
    table.add_column("Skills", justify="right")
    table.add_column("Instructions", justify="right")
    table.add_column("Description")
    for agent in snapshot.agents:
        table.add_row(
            agent.id,
            f"{agent.avatar_emoji} {agent.name}",
            str(len(agent.skill_refs)),
            str(len(agent.instruction_refs)),
            agent.description,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# tools command
# ---------------------------------------------------------------------------


@cli.command(name="tools")
def tools_command() -> None:
    """List the tools the server exposes through tools/list."""
    from promptforge.tools import TOOLS

    table = Table(title="Tools", show_lines=True)
    table.add_column("Name", style="bold", min_width=12)
    table.add_column("Arguments", min_width=10)
    table.add_column("Description")
    for descriptor in TOOLS.descriptors():
        schema = descriptor["inputSchema"]
        required = set(schema.get("required", []))
        args = [
            f"{name}*" if name in required else name
            for name in schema.get("properties", {})
        ]
        table.add_row(descriptor["name"], ", ".join(args) or "[dim]none[/dim]", descriptor["description"])
    console.print(table)


# ---------------------------------------------------------------------------
# compose command
# ---------------------------------------------------------------------------


@cli.command(name="compose")
@click.argument("agent")
@_source_options
def compose_command(agent: str, db: str | None, data: str | None, log_level: str | None) -> None:
    """Print the composed system prompt for an agent.

    AGENT is the agent id or (case-insensitive) name.
    """
    from promptforge.compose import compose_agent

    snapshot = _load_snapshot_or_exit(_resolve_config(db, data, log_level))
    record = snapshot.find_agent(agent)
    if record is None:
        err_console.print(f"[red]Error:[/red] Agent not found: {agent!r}")
        sys.exit(1)
    click.echo(compose_agent(snapshot, record), nl=False)


# ---------------------------------------------------------------------------
# instructions command
# ---------------------------------------------------------------------------


@cli.command(name="instructions")
@click.option(
    "--markdown",
    is_flag=True,
    default=False,
    help="Render the same document the instructions/all resource serves",
)
@_source_options
def instructions_command(
    markdown: bool, db: str | None, data: str | None, log_level: str | None
) -> None:
    """Print all enabled instructions, highest priority first."""
    from promptforge.compose import combine_instructions, render_instructions_markdown

    snapshot = _load_snapshot_or_exit(_resolve_config(db, data, log_level))
    if markdown:
        click.echo(render_instructions_markdown(snapshot), nl=False)
        return
    combined = combine_instructions(snapshot)
    if not combined:
        err_console.print("[yellow]No instructions enabled.[/yellow]")
        return
    click.echo(combined)


if __name__ == "__main__":
    cli()
