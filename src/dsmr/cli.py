"""Command-line interface for reading DSMR telegram streams."""

import json
import logging
import os
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import load_environment, load_settings
from .models import Telegram
from .parser.errors import ParseError
from .parser.telegram import parse
from .reports.series import get_current_data, get_event_log_messages, get_voltage_data

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def format_phases(values) -> str:
    return " / ".join(f"{v:.1f}" for v in values)


def telegram_to_dict(telegram: Telegram) -> dict:
    data = asdict(telegram)
    for entry in data["event_log"]:
        entry["severity"] = entry["severity"].value
    return data


def read_telegrams(ctx, stream) -> list[Telegram]:
    """Parse a telegram stream, exiting with the configured code on failure."""
    settings = ctx.obj["settings"]
    text = stream.read()
    try:
        telegrams = parse(text, to_timestamp=settings.timestamp_converter())
    except ParseError as e:
        err_console.print(f"[red]Failed to parse telegrams: {escape(str(e))}[/red]")
        ctx.exit(settings.parse_failure_exit_code)
    logger.info("Parsed %d telegram(s)", len(telegrams))
    return telegrams


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML settings file (or set DSMR_CONFIG)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """Read DSMR smart meter telegrams."""
    setup_logging(verbose)
    ctx.ensure_object(dict)

    # .env must be loaded before DSMR_CONFIG is looked up
    load_environment()
    config_path = config_path or os.environ.get("DSMR_CONFIG")
    try:
        ctx.obj["settings"] = load_settings(Path(config_path) if config_path else None)
    except (OSError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@cli.command("parse")
@click.argument("stream", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def parse_cmd(ctx, stream, as_json):
    """Parse telegrams from FILE (default: stdin) and show a summary."""
    telegrams = read_telegrams(ctx, stream)

    if as_json:
        click.echo(json.dumps([telegram_to_dict(t) for t in telegrams], indent=2))
        return

    if not telegrams:
        console.print("[yellow]No telegrams found[/yellow]")
        return

    table = Table(title=f"Telegrams ({len(telegrams)})")
    table.add_column("Time (UTC)", style="cyan", no_wrap=True)
    table.add_column("Voltage (V)", justify="right")
    table.add_column("Current (A)", justify="right")
    table.add_column("Power (kW)", justify="right")
    table.add_column("Consumed", justify="right")
    table.add_column("Produced", justify="right")
    table.add_column("Events", justify="right")

    for telegram in telegrams:
        elec = telegram.electricity
        table.add_row(
            format_time(telegram.timestamp),
            format_phases(elec.voltage),
            format_phases(elec.current),
            format_phases(elec.power),
            f"{elec.total_consumed:.3f}",
            f"{elec.total_produced:.3f}",
            str(len(telegram.event_log)),
        )

    console.print(table)


def print_series(title: str, unit: str, samples, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([asdict(s) for s in samples], indent=2))
        return

    table = Table(title=title)
    table.add_column("Time (UTC)", style="cyan", no_wrap=True)
    for phase in (1, 2, 3):
        table.add_column(f"Phase {phase} ({unit})", justify="right")

    for sample in samples:
        table.add_row(
            format_time(sample.timestamp),
            f"{sample.phase_1:.1f}",
            f"{sample.phase_2:.1f}",
            f"{sample.phase_3:.1f}",
        )

    console.print(table)


@cli.command()
@click.argument("stream", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def voltage(ctx, stream, as_json):
    """Show per-phase voltage over time."""
    telegrams = read_telegrams(ctx, stream)
    print_series("Voltage over time", "V", get_voltage_data(telegrams), as_json)


@cli.command()
@click.argument("stream", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def current(ctx, stream, as_json):
    """Show per-phase current over time."""
    telegrams = read_telegrams(ctx, stream)
    print_series("Current over time", "A", get_current_data(telegrams), as_json)


@cli.command()
@click.argument("stream", type=click.File("r"), default="-")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def events(ctx, stream, as_json):
    """Show event log messages split by severity."""
    telegrams = read_telegrams(ctx, stream)
    messages = get_event_log_messages(telegrams)

    if as_json:
        click.echo(json.dumps(asdict(messages), indent=2))
        return

    if not messages.low and not messages.high:
        console.print("[yellow]No event log messages[/yellow]")
        return

    for message in messages.high:
        console.print(f"[red]HIGH[/red] {escape(message)}", highlight=False)
    for message in messages.low:
        console.print(f"[dim]LOW[/dim]  {escape(message)}", highlight=False)


if __name__ == "__main__":
    cli()
