"""Shared CLI output formatters.

``serve`` writes only through ``err_console`` so human output never mixes
into the protocol stream on stdout.
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from minimcp.tools.base import ToolDescriptor  # noqa: TC001

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors as a table."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Parameters")

    for tool in tools:
        params = ", ".join(tool.input_schema.get("properties", {})) or "-"
        table.add_row(tool.name, _truncate(tool.description), params)

    console.print(table)


def print_json(data: Any) -> None:
    """Write *data* as plain indented JSON, without rich wrapping or markup."""
    click.echo(json.dumps(data, indent=2, default=str))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
