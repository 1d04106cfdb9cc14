"""
Document commands: sign, verify, status, list, cleanup
"""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from didsign.config import load_settings
from didsign.core.errors import DidSignError, SidecarFormatError, SidecarIOError
from didsign.document import DocumentSigner, Error, Invalid, SidecarState, SidecarStore

app = typer.Typer()
console = Console()


def _fail(message: str, json_output: bool, code: int = 1):
    if json_output:
        print(json.dumps({"success": False, "error": message}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code)


def _signer(json_output: bool) -> DocumentSigner:
    try:
        return DocumentSigner.from_settings(load_settings())
    except ValidationError as e:
        _fail(f"Invalid DIDSIGN_* settings: {e}", json_output)


@app.command()
def sign(
    document: Path = typer.Argument(..., help="Document to sign"),
    mnemonic: Optional[str] = typer.Option(
        None,
        "--mnemonic",
        "-m",
        envvar="DIDSIGN_MNEMONIC",
        help="BIP-39 mnemonic of the signer",
    ),
    name: str = typer.Option(..., "--name", help="Signer display name"),
    group: int = typer.Option(0, "--group", "-g", help="Group id recorded with the signature"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Sign a document and write its .didsign sidecar.

    Examples:
        didsign document sign contract.pdf -m "word ... word" --name "Jane Doe" --group 42
        DIDSIGN_MNEMONIC="..." didsign document sign contract.pdf --name "Jane Doe"
    """
    if not document.is_file():
        _fail(f"File not found: {document}", json_output, code=2)
    if not mnemonic:
        _fail("No mnemonic given (use --mnemonic or DIDSIGN_MNEMONIC)", json_output)

    signer = _signer(json_output)
    try:
        result = signer.sign_file(document, mnemonic, name, group)
    except DidSignError as e:
        _fail(str(e), json_output)

    payload = result.record.payload
    if json_output:
        print(
            json.dumps(
                {
                    "success": True,
                    "sidecar_path": str(result.sidecar_path),
                    "document_hash": payload.document_hash.hex(),
                    "signer_address": payload.signer_address,
                    "signer_key_uri": payload.signer_key_uri,
                    "timestamp_millis": payload.timestamp_millis,
                },
                indent=2,
            )
        )
    else:
        console.print("[green]✓ Document signed[/green]")
        console.print(f"  Signature file: [cyan]{result.sidecar_path}[/cyan]")
        console.print(f"  Document hash: {payload.document_hash.hex()[:16]}...")
        console.print(f"  Signer: {payload.signer_address}")
        console.print(f"  Key URI: {payload.signer_key_uri}")


@app.command()
def verify(
    document: Path = typer.Argument(..., help="Document to verify"),
    sidecar: Optional[Path] = typer.Option(
        None,
        "--sidecar",
        "-s",
        help="Signature file (default: <document stem>.didsign)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Verify a document against its signature file.

    Exit code is 0 when valid, 1 when invalid or unverifiable, 2 when the
    document does not exist.

    Examples:
        didsign document verify contract.pdf
        didsign document verify contract.pdf --sidecar signatures/contract.didsign
    """
    if not document.is_file():
        _fail(f"File not found: {document}", json_output, code=2)

    verdict = _signer(json_output).verify_file(document, sidecar)

    if json_output:
        print(json.dumps({"document": str(document), **verdict.to_dict()}, indent=2))
    elif isinstance(verdict, Invalid):
        console.print(f"[red]✗ Signature invalid:[/red] {verdict.reason}")
    elif isinstance(verdict, Error):
        console.print(f"[red]✗ Cannot verify:[/red] {verdict.message}")
    else:
        info = verdict.signer_info
        console.print("[green]✓ Signature valid[/green]")
        table = Table(show_header=False, box=None)
        table.add_row("  Signer", info.signer_name)
        table.add_row("  Address", f"[cyan]{info.address}[/cyan]")
        table.add_row("  Key URI", info.key_uri)
        table.add_row("  Group", str(info.group_id))
        table.add_row("  Signed at (ms)", str(info.timestamp_millis))
        table.add_row("  Algorithm", info.algorithm)
        console.print(table)

    if not verdict.is_valid:
        raise typer.Exit(1)


@app.command()
def status(
    document: Path = typer.Argument(..., help="Document to classify"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show whether a document is unsigned, signed-valid or signed-invalid.
    """
    state = _signer(json_output).state_of(document)

    if json_output:
        print(json.dumps({"document": str(document), "state": state.value}))
        return

    color = {
        SidecarState.UNSIGNED: "yellow",
        SidecarState.SIGNED_VALID: "green",
        SidecarState.SIGNED_INVALID: "red",
    }[state]
    console.print(f"{document}: [{color}]{state.value}[/{color}]")


@app.command("list")
def list_signatures(
    directory: Path = typer.Argument(..., help="Directory containing documents"),
    group: Optional[int] = typer.Option(None, "--group", "-g", help="Only sidecars with this group id"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List signature files in a directory.

    Examples:
        didsign document list ./contracts
        didsign document list ./contracts --group 42
    """
    if not directory.is_dir():
        _fail(f"Directory not found: {directory}", json_output, code=2)

    store = SidecarStore(directory)
    paths = store.list_sidecars() if group is None else store.find_by_group(group)

    rows = []
    for path in paths:
        try:
            payload = store.load(path).payload
        except (SidecarIOError, SidecarFormatError) as e:
            rows.append({"sidecar": path.name, "error": str(e)})
            continue
        rows.append(
            {
                "sidecar": path.name,
                "document": payload.document_file_name,
                "signer_name": payload.signer_name,
                "signer_address": payload.signer_address,
                "group_id": payload.group_id,
                "timestamp_millis": payload.timestamp_millis,
            }
        )

    if json_output:
        print(json.dumps(rows, indent=2))
        return

    table = Table(title=f"Signatures in {directory}")
    table.add_column("Sidecar", style="cyan")
    table.add_column("Document")
    table.add_column("Signer")
    table.add_column("Group", justify="right")
    table.add_column("Timestamp (ms)", justify="right")

    for row in rows:
        if "error" in row:
            table.add_row(row["sidecar"], "[red]unreadable[/red]", "", "", "")
        else:
            table.add_row(
                row["sidecar"],
                row["document"],
                row["signer_name"],
                str(row["group_id"]),
                str(row["timestamp_millis"]),
            )
    console.print(table)


@app.command()
def cleanup(
    directory: Path = typer.Argument(..., help="Directory containing documents"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Remove signature files whose documents no longer exist.
    """
    if not directory.is_dir():
        _fail(f"Directory not found: {directory}", json_output, code=2)

    try:
        removed = SidecarStore(directory).cleanup_orphans()
    except DidSignError as e:
        _fail(str(e), json_output)

    if json_output:
        print(json.dumps({"success": True, "removed": [str(p) for p in removed]}))
        return

    if not removed:
        console.print("[green]No orphaned signature files[/green]")
    for path in removed:
        console.print(f"  [yellow]removed[/yellow] {path}")
