"""
Command-line interface for feed subscription state.

Uses Typer to provide maintenance commands over a state file: add a
subscription, merge a fetched batch, and show what is stored.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, load_config
from .errors import FeedTrackerError
from .input.batch_parser import load_batch_file
from .logging_utils import setup_logging
from .runner import add_subscription, load_state, run_session

app = typer.Typer(add_completion=False)
console = Console()

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")


def _prepare(config: Path | None, log_level: str | None, state: Path | None) -> tuple[AppConfig, Path]:
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    state_path = state if state is not None else Path(cfg.state.path)
    setup_logging(cfg.logging, state_path.parent)
    return cfg, state_path


@app.command()
def add(
    url: str = typer.Argument(..., help="Feed URL."),
    name: str = typer.Argument(..., help="Display name."),
    state: Path | None = typer.Option(None, "--state", "-s", help="State file path."),
    directory: str | None = typer.Option(None, "--directory", "-d", help="Download directory."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Add a subscription to the state file."""
    cfg, state_path = _prepare(config, log_level, state)
    try:
        sub = add_subscription(state_path, url, name, directory, cfg)
    except (ValueError, FeedTrackerError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"Subscribed to {sub.name} ({sub.url})")


@app.command()
def merge(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    state: Path | None = typer.Option(None, "--state", "-s", help="State file path."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Merge a fetched batch file into the state file."""
    cfg, state_path = _prepare(config, log_level, state)
    try:
        batch = load_batch_file(input)
        run_session(state_path, batch, cfg, console=console)
    except (ValueError, FeedTrackerError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


@app.command()
def show(
    state: Path | None = typer.Option(None, "--state", "-s", help="State file path."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """List the subscriptions stored in the state file."""
    _, state_path = _prepare(config, log_level, state)
    try:
        subs = load_state(state_path)
    except FeedTrackerError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = Table(title=str(state_path))
    table.add_column("Name")
    table.add_column("URL")
    table.add_column("Latest #", justify="right")
    table.add_column("Latest entry")
    table.add_column("Queued", justify="right")
    for sub in subs:
        table.add_row(
            sub.name,
            sub.url,
            str(sub.get_latest_entry_number()),
            sub.get_latest_entry_name(),
            str(len(sub.feed_state.queue)),
        )
    console.print(table)


if __name__ == "__main__":
    app()
