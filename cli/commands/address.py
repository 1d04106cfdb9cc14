"""
Address commands: encode, decode, validate, convert, networks
"""

import json
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from didsign.core.errors import AddressError, DidSignError
from didsign.ss58 import convert as convert_address
from didsign.ss58 import decode as decode_address
from didsign.ss58 import encode as encode_address
from didsign.ss58 import supported_networks, validate_many

app = typer.Typer()
console = Console()


def _fail(message: str, json_output: bool, code: int = 1):
    if json_output:
        print(json.dumps({"success": False, "error": message}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


@app.command()
def encode(
    public_key: str = typer.Argument(..., help="32-byte public key as hex (0x prefix optional)"),
    network: str = typer.Option("substrate", "--network", "-n", help="Network name or prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Encode a public key as an SS58 address.

    Examples:
        didsign address encode 0xd43593c7...a27d
        didsign address encode d43593c7...a27d --network kilt
    """
    hex_key = public_key[2:] if public_key.lower().startswith("0x") else public_key
    try:
        key = bytes.fromhex(hex_key)
    except ValueError:
        _fail(f"Public key is not valid hex: {public_key}", json_output)

    try:
        address = encode_address(key, network)
    except DidSignError as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps(address.to_dict(), indent=2))
    else:
        console.print(f"[cyan]{address.text}[/cyan]")
        console.print(f"  Network: {address.network.name} ({address.network.value})")


@app.command()
def decode(
    address: str = typer.Argument(..., help="SS58 address"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Decode an SS58 address into network and public key.

    Examples:
        didsign address decode 5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY
    """
    try:
        decoded = decode_address(address)
    except AddressError as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps(decoded.to_dict(), indent=2))
    else:
        table = Table(show_header=False, box=None)
        table.add_row("[bold]Address[/bold]", decoded.text)
        table.add_row("[bold]Network[/bold]", f"{decoded.network.name} ({decoded.network.value})")
        table.add_row("[bold]Public key[/bold]", "0x" + decoded.public_key.hex())
        table.add_row("[bold]Checksum[/bold]", decoded.checksum.hex())
        console.print(table)


@app.command()
def validate(
    addresses: List[str] = typer.Argument(..., help="One or more SS58 addresses"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Validate addresses without failing on the first bad one.

    Exit code is 0 when every address is valid, 1 otherwise.

    Examples:
        didsign address validate 5Grwva... 4pZGzL...
    """
    results = validate_many(addresses)
    all_valid = all(r.is_valid for r in results.values())

    if json_output:
        print(
            json.dumps(
                {"valid": all_valid, "results": {a: r.to_dict() for a, r in results.items()}},
                indent=2,
            )
        )
    else:
        table = Table(title="Address validation")
        table.add_column("Address", style="cyan")
        table.add_column("Format")
        table.add_column("Checksum")
        table.add_column("Network")
        table.add_column("Error", style="red")

        for text, result in results.items():
            table.add_row(
                text,
                "[green]✓[/green]" if result.is_valid_format else "[red]✗[/red]",
                "[green]✓[/green]" if result.is_valid_checksum else "[red]✗[/red]",
                result.network.name if result.network else "-",
                result.error or "",
            )
        console.print(table)

    if not all_valid:
        raise typer.Exit(1)


@app.command()
def convert(
    address: str = typer.Argument(..., help="SS58 address to convert"),
    network: str = typer.Option(..., "--network", "-n", help="Target network name or prefix"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Re-encode an address for another network (same public key).

    Examples:
        didsign address convert 5GrwvaEF... --network kilt
    """
    try:
        converted = convert_address(address, network)
    except AddressError as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps({"source": address, **converted.to_dict()}, indent=2))
    else:
        console.print(f"[cyan]{converted.text}[/cyan]")
        console.print(f"  Network: {converted.network.name} ({converted.network.value})")


@app.command()
def networks(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List registered networks."""
    registered = supported_networks()

    if json_output:
        print(
            json.dumps(
                [{"name": n.name, "prefix": n.value, "description": n.description} for n in registered],
                indent=2,
            )
        )
        return

    table = Table(title="SS58 networks")
    table.add_column("Prefix", justify="right", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    for n in registered:
        table.add_row(str(n.value), n.name, n.description)
    console.print(table)
