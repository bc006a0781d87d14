"""
Lumberlog CLI - Main entry point
"""

import logging
from typing import Dict, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from lumberlog import __version__
from lumberlog.core.config.settings import get_settings
from lumberlog.core.config.validation import (
    ConfigLoader,
    LoggerConfig,
    validate_config,
)
from lumberlog.core.exceptions.custom_exceptions import ConfigurationError
from lumberlog.core.logging.levels import Severity
from lumberlog.core.logging.logger import Logger

app = typer.Typer(
    name="lumberlog",
    help="Leveled, structured logging from the command line",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)


def _base_config(config_file: Optional[str]) -> LoggerConfig:
    if config_file:
        return ConfigLoader.load_file(config_file)
    return get_settings().to_logger_config()


def _parse_fields(pairs: List[str]) -> Dict[str, str]:
    fields: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(
                f"expected key=value, got {pair!r}", param_hint="--field"
            )
        fields[key] = value
    return fields


def _fail(error: ConfigurationError) -> None:
    err_console.print(f"[red]Configuration error:[/red] {error.message}")
    raise typer.Exit(code=2)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show Lumberlog's own diagnostics on stderr"
    ),
) -> None:
    """
    Lumberlog CLI - write structured log records from scripts and shells
    """
    if verbose:
        handler = RichHandler(console=err_console, show_path=False)
        diagnostics = logging.getLogger("lumberlog")
        diagnostics.addHandler(handler)
        diagnostics.setLevel(logging.DEBUG)


@app.command()
def emit(
    level: str = typer.Argument(..., help="Severity: DEBUG, INFO, WARN, ERROR or FATAL"),
    message: str = typer.Argument(..., help="Message text, written verbatim"),
    field: List[str] = typer.Option(
        [], "--field", "-f", help="Field to attach, as key=value (repeatable)"
    ),
    json_output: Optional[bool] = typer.Option(
        None, "--json/--text", help="Output format"
    ),
    color: Optional[bool] = typer.Option(
        None, "--color/--no-color", help="Colour text output by severity"
    ),
    caller: Optional[bool] = typer.Option(
        None, "--caller/--no-caller", help="Include the call site"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Log file path (default: stdout)"
    ),
    threshold: Optional[str] = typer.Option(
        None, "--threshold", "-t", help="Minimum severity written"
    ),
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML or JSON configuration file"
    ),
) -> None:
    """
    Write one log record.

    Options given here override the configuration file, which in turn
    replaces the LUMBERLOG_* environment settings. A FATAL record exits
    with status 1.
    """
    fields = _parse_fields(field)

    try:
        severity = Severity.parse(level)
        data = _base_config(config_file).model_dump()
        overrides = {
            "json_output": json_output,
            "color": color,
            "show_caller": caller,
            "output_path": output,
            "threshold": threshold,
        }
        data.update({k: v for k, v in overrides.items() if v is not None})
        logger = Logger(validate_config(data))
    except ConfigurationError as e:
        _fail(e)
        return

    if fields:
        logger = logger.with_fields(fields)

    try:
        getattr(logger, severity.name.lower())(message)
    finally:
        logger.close()


@app.command(name="config")
def show_config(
    config_file: Optional[str] = typer.Option(
        None, "--config", "-c", help="YAML or JSON configuration file"
    ),
) -> None:
    """Show the effective logger configuration"""
    try:
        config = _base_config(config_file)
    except ConfigurationError as e:
        _fail(e)
        return

    table = Table(title="Lumberlog Configuration")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("threshold", config.threshold.label)
    table.add_row("format", "json" if config.json_output else "text")
    table.add_row("show_caller", str(config.show_caller))
    table.add_row("color", str(config.color))
    table.add_row("output", config.output_path or "stdout")
    if config.output_path:
        rotation = config.rotation
        table.add_row("max_size_mb", str(rotation.max_size_mb))
        table.add_row("max_backups", str(rotation.max_backups))
        table.add_row("max_age_days", str(rotation.max_age_days))
        table.add_row("compress", str(rotation.compress))

    console.print(table)


@app.command()
def version() -> None:
    """Show Lumberlog version information"""
    console.print(f"Lumberlog version {__version__}")


if __name__ == "__main__":
    app()
