"""``minimcp serve`` — run the JSON-RPC loop on stdin/stdout."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from minimcp.cli_commands._output import err_console


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML config file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Override the configured log level.",
)
@click.option("--log-file", default=None, help="Also write logs, including every input line, to this file.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(
    config_path: str | None,
    log_level: str | None,
    log_file: str | None,
    telemetry: bool,
) -> None:
    """Serve the registered tools over newline-delimited JSON-RPC on stdio."""
    from minimcp.config import ConfigLoader, ServerConfig
    from minimcp.errors import ConfigError
    from minimcp.server import RequestRouter, StdioServer
    from minimcp.tools import default_registry
    from minimcp.utils.log import configure_logging
    from minimcp.utils.telemetry import configure_telemetry

    try:
        config = ConfigLoader(Path(config_path)).load() if config_path else ServerConfig()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {exc}")
        sys.exit(1)

    if log_level:
        config.log_level = log_level.upper()  # type: ignore[assignment]
    if log_file:
        config.log_file = log_file
    if telemetry:
        config.telemetry.enabled = True

    configure_logging(config.log_level, config.log_file)

    if config.telemetry.enabled:
        try:
            configure_telemetry(config.telemetry, service_name=config.name)
        except ImportError as exc:
            err_console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    server = StdioServer(RequestRouter(default_registry()))
    err_console.print(f"[green]{config.name} server started...[/green]")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        err_console.print("[yellow]Interrupted.[/yellow]")
