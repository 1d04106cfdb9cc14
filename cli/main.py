#!/usr/bin/env python3
"""
didsign CLI - SS58 addresses and detached document signatures

Main entrypoint for the didsign command-line tool.
"""

from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from cli.commands import address, document, key
from didsign.logging_config import setup_logging

# Initialize Typer app
app = typer.Typer(
    name="didsign",
    help="SS58 address tools and detached Sr25519 document signatures",
    add_completion=False,
)

# Console for rich output
console = Console()

# Add command groups
app.add_typer(address.app, name="address", help="SS58 address encoding and validation")
app.add_typer(key.app, name="key", help="Mnemonic and key inspection")
app.add_typer(document.app, name="document", help="Document signing and verification")


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override DIDSIGN_LOG_LEVEL"),
):
    """Configure logging before any command runs."""
    try:
        setup_logging(level=log_level)
    except ValidationError:
        # Bad DIDSIGN_* values are reported by the command that loads them
        setup_logging(level=log_level or "INFO", log_format="text")


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from didsign.ss58 import IDENTITY_NETWORK

    table = Table(show_header=False, box=None)
    table.add_row("[bold]didsign CLI[/bold]", f"v{__version__}")
    table.add_row("Signature scheme", "Sr25519")
    table.add_row("Identity network", f"{IDENTITY_NETWORK.name} ({IDENTITY_NETWORK.value})")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
