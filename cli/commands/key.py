"""
Key commands: inspect, generate
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from didsign.core.errors import DidSignError
from didsign.keys import SR25519, derive_keypair, generate_mnemonic, split_secret_uri
from didsign.ss58 import IDENTITY_NETWORK

app = typer.Typer()
console = Console()


@app.command()
def inspect(
    mnemonic: Optional[str] = typer.Option(
        None,
        "--mnemonic",
        "-m",
        envvar="DIDSIGN_MNEMONIC",
        help="BIP-39 mnemonic, optionally with //path///password appended",
    ),
    path: str = typer.Option("", "--path", "-p", help="Derivation path, e.g. //did//0"),
    scheme: str = typer.Option(SR25519, "--scheme", "-s", help="sr25519 or ed25519"),
    network: str = typer.Option(IDENTITY_NETWORK.name, "--network", "-n", help="Network for the address"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the public key and address derived from a mnemonic.

    The secret never leaves the process; only public values are printed.

    Examples:
        didsign key inspect -m "bottom drive ... walk" --path //Alice --network substrate
        DIDSIGN_MNEMONIC="..." didsign key inspect --path //did//0
    """
    if not mnemonic:
        message = "No mnemonic given (use --mnemonic or DIDSIGN_MNEMONIC)"
        if json_output:
            print(json.dumps({"success": False, "error": message}))
        else:
            console.print(f"[red]Error:[/red] {message}")
        raise typer.Exit(1)

    phrase, uri_path, password = split_secret_uri(mnemonic)
    full_path = uri_path + path

    try:
        keypair = derive_keypair(phrase, full_path, scheme=scheme, password=password)
        address = keypair.ss58_address(network)
    except DidSignError as e:
        if json_output:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(
            json.dumps(
                {
                    "success": True,
                    "scheme": keypair.scheme,
                    "path": full_path,
                    "public_key": keypair.public_key_hex,
                    "address": address.text,
                    "network": address.network.name,
                },
                indent=2,
            )
        )
    else:
        table = Table(show_header=False, box=None)
        table.add_row("[bold]Scheme[/bold]", keypair.algorithm)
        table.add_row("[bold]Path[/bold]", full_path or "(root)")
        table.add_row("[bold]Public key[/bold]", "0x" + keypair.public_key_hex)
        table.add_row("[bold]Address[/bold]", f"[cyan]{address.text}[/cyan]")
        table.add_row("[bold]Network[/bold]", f"{address.network.name} ({address.network.value})")
        console.print(table)


@app.command()
def generate(
    words: int = typer.Option(12, "--words", "-w", help="Word count: 12, 15, 18, 21 or 24"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Generate a new BIP-39 mnemonic.

    Examples:
        didsign key generate
        didsign key generate --words 24
    """
    try:
        phrase = generate_mnemonic(words)
    except DidSignError as e:
        if json_output:
            print(json.dumps({"success": False, "error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if json_output:
        print(json.dumps({"success": True, "mnemonic": phrase, "words": words}))
    else:
        console.print("[yellow]Store this phrase securely; it controls the derived keys.[/yellow]")
        console.print(phrase)
