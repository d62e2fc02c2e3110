"""``minimcp tools`` — list registered tools and inspect their input schemas."""

from __future__ import annotations

import sys

import click

from minimcp.cli_commands._output import console, print_json, print_tools_table


@click.group()
def tools() -> None:
    """List and inspect tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print descriptors as JSON.")
def list_cmd(as_json: bool) -> None:
    """List every registered tool in registration order."""
    from minimcp.tools import default_registry

    descriptors = default_registry().list_tools()

    if as_json:
        print_json([d.model_dump() for d in descriptors])
        return

    if not descriptors:
        console.print("[yellow]No tools registered.[/yellow]")
        return

    print_tools_table(descriptors)


@tools.command("schema")
@click.argument("name")
def schema_cmd(name: str) -> None:
    """Print the input schema of the tool called NAME."""
    from minimcp.tools import default_registry

    tool = default_registry().get(name)
    if tool is None:
        console.print(f"[red]Tool '{name}' not found[/red]")
        sys.exit(1)

    print_json(tool.input_schema())
