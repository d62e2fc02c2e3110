"""minimcp CLI entrypoint."""

from __future__ import annotations

import click

from minimcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="minimcp")
def main() -> None:
    """minimcp — JSON-RPC tool server over stdio."""


# Register subcommands
from minimcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
