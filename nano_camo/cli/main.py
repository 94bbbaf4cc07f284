"""
NanoCamo - Command Line Interface
===================================
CLI per derivazione address Camo e calcolo pagamenti stealth.

Security Level: MEDIUM
Last Updated: 2026-10-19
Version: 1.0.0

Commands:
- address: Deriva address camo_ da seed e indice
- decode: Decodifica e mostra un address camo_
- negotiate: Negozia la versione con un version byte remoto
- send: Calcola l'account mascherato per un pagamento
- receive: Ricava la chiave mascherata da una notifica

ATTENZIONE: seed e chiavi passati da riga di comando finiscono nella
history della shell. Uso previsto: test e sviluppo.
"""

from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Internal imports
from nano_camo.camo.address import CamoAddress
from nano_camo.camo.notification import Notification
from nano_camo.camo.version import CamoVersions
from nano_camo.config import get_settings
from nano_camo.constants import raw_to_nano
from nano_camo.domain.keypairs import Key
from nano_camo.errors import NanoCamoException, ValidationError
from nano_camo.logging_setup import get_logger, setup_logging_from_settings
from nano_camo.wallet.hd_wallet import CamoKeys
from nano_camo.wallet.stealth_address import receive_payment, sender_ecdh


# ============================================================================
# CLI APP
# ============================================================================

app = typer.Typer(
    name="nanocamo",
    help="NanoCamo - Camo stealth address toolkit",
    add_completion=False
)

console = Console()

logger = get_logger("cli")


# ============================================================================
# PARSING HELPERS
# ============================================================================

def _parse_hex(value: str, field: str, size: int) -> bytearray:
    try:
        data = bytearray.fromhex(value)
    except ValueError as e:
        raise ValidationError(
            f"{field} is not valid hex",
            code="INVALID_HEX",
            details={"field": field}
        ) from e
    if len(data) != size:
        raise ValidationError(
            f"{field} must be {size} bytes, got {len(data)}",
            code="INVALID_HEX_LENGTH",
            details={"field": field, "expected": size, "got": len(data)}
        )
    return data


def _parse_version_byte(value: str) -> CamoVersions:
    try:
        bits = int(value, 0)
    except ValueError as e:
        raise ValidationError(
            f"Invalid version byte: {value!r}",
            code="INVALID_VERSION_BYTE"
        ) from e
    return CamoVersions.from_byte(bits)


def _parse_version_list(values: Optional[List[int]]) -> CamoVersions:
    if not values:
        return get_settings().local_versions()
    return CamoVersions.from_versions(values)


def _fail(e: NanoCamoException) -> None:
    console.print(f"[red]Error ({e.code}): {e.message}[/red]", soft_wrap=True)
    raise typer.Exit(1)


def _versions_str(versions: CamoVersions) -> str:
    listed = ", ".join(str(int(v)) for v in versions) or "none"
    return f"{versions.encode_to_bits():#04x} [{listed}]"


# ============================================================================
# COMMANDS
# ============================================================================

@app.command("address")
def address_cmd(
    seed: str = typer.Option(..., "--seed", "-s", help="Wallet seed (64 hex chars)"),
    index: int = typer.Option(0, "--index", "-i", help="Account index"),
    versions: str = typer.Option("0x01", "--versions", "-V", help="Version byte (es. 0x01)")
):
    """Derive the camo_ address for a seed and index"""
    try:
        version_set = _parse_version_byte(versions)
        with CamoKeys.from_seed(_parse_hex(seed, "seed", 32), index, version_set) as keys:
            address = keys.to_camo_address()

        console.print(Panel.fit(
            f"Index: {index}\n"
            f"Versions: {_versions_str(version_set)}",
            title="🔐 Camo address"
        ))
        # indirizzi su una riga sola, copiabili
        console.print(str(address), soft_wrap=True, highlight=False)
        console.print(f"Notification account: {address.signer_account()}", soft_wrap=True, highlight=False)

    except NanoCamoException as e:
        _fail(e)


@app.command("decode")
def decode_cmd(
    address: str = typer.Argument(..., help="camo_ address")
):
    """Decode and display a camo_ address"""
    try:
        decoded = CamoAddress.from_str(address)

        table = Table(title="Camo Address")
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="green")

        preferred = decoded.versions.preferred()
        table.add_row("Versions", _versions_str(decoded.versions))
        table.add_row("Preferred", str(int(preferred)) if preferred else "none")
        table.add_row("Spend key", decoded.spend_key.hex())
        table.add_row("View key", decoded.view_key.hex())
        table.add_row("Notification account", str(decoded.signer_account()))

        console.print(table)

    except NanoCamoException as e:
        _fail(e)


@app.command("negotiate")
def negotiate_cmd(
    remote: str = typer.Argument(..., help="Remote version byte (es. 0x52)"),
    local: Optional[List[int]] = typer.Option(
        None,
        "--local",
        "-l",
        help="Locally supported version (repeatable, default from config)"
    )
):
    """Negotiate the camo protocol version with a remote version byte"""
    try:
        remote_versions = _parse_version_byte(remote)
        local_versions = _parse_version_list(local)
        version = remote_versions.negotiate(local_versions)

        console.print(f"[green]Negotiated version: {int(version)}[/green]")

    except NanoCamoException as e:
        _fail(e)


@app.command("send")
def send_cmd(
    address: str = typer.Argument(..., help="Recipient camo_ address"),
    seed: str = typer.Option(..., "--seed", "-s", help="Sender seed (64 hex chars)"),
    index: int = typer.Option(0, "--index", "-i", help="Sender nano_ account index"),
    frontier: str = typer.Option(..., "--frontier", "-f", help="Sender frontier block hash (64 hex chars)"),
    amount: int = typer.Option(..., "--amount", "-a", help="Total amount (raw)"),
    notify: Optional[int] = typer.Option(None, "--notify", "-n", help="Notification amount (raw)")
):
    """Compute the notification and masked account for a payment"""
    try:
        recipient = CamoAddress.from_str(address)
        frontier_hash = bytes(_parse_hex(frontier, "frontier", 32))

        with Key.from_seed(_parse_hex(seed, "seed", 32), index) as key:
            sender_account = key.to_account()
            with sender_ecdh(recipient, key, frontier_hash) as payment:
                plan = payment.plan(amount, notify)

        table = Table(title=f"Camo Payment (v{int(plan.version)})")
        table.add_column("Step", style="cyan")
        table.add_column("Destination", style="green")
        table.add_column("Amount", justify="right")
        table.add_column("Representative")

        table.add_row(
            "1. notification",
            str(plan.notification_account),
            raw_to_nano(plan.notify_amount_raw),
            str(plan.representative_payload)
        )
        table.add_row(
            "2. payment",
            str(plan.masked_account),
            raw_to_nano(plan.masked_amount_raw),
            "-"
        )

        console.print(f"Sender: {sender_account}", soft_wrap=True, highlight=False)
        console.print(f"Masked account: {plan.masked_account}", soft_wrap=True, highlight=False)
        console.print(f"Representative: {plan.representative_payload}", soft_wrap=True, highlight=False)
        console.print(table)

    except NanoCamoException as e:
        _fail(e)


@app.command("receive")
def receive_cmd(
    representative: str = typer.Argument(..., help="Representative of the notification block (R, nano_)"),
    seed: str = typer.Option(..., "--seed", "-s", help="Wallet seed (64 hex chars)"),
    index: int = typer.Option(0, "--index", "-i", help="Camo account index"),
    versions: str = typer.Option("0x01", "--versions", "-V", help="Version byte of the address"),
    show_key: bool = typer.Option(False, "--show-key", help="Print the masked private key")
):
    """Derive the masked account from an observed notification"""
    try:
        version_set = _parse_version_byte(versions)
        with CamoKeys.from_seed(_parse_hex(seed, "seed", 32), index, version_set) as keys:
            notification = Notification.create(keys.signer_account(), representative)
            payment = receive_payment(keys, notification)

        console.print(Panel.fit(f"Index: {index}", title="📥 Received"))
        console.print(f"Masked account: {payment.masked_account}", soft_wrap=True, highlight=False)
        if show_key:
            secret_hex = payment.masked_key.as_scalar().expose_secret().hex()
            console.print(f"Masked private key: {secret_hex}", soft_wrap=True, highlight=False)
        payment.wipe()

    except NanoCamoException as e:
        _fail(e)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output"
    )
):
    """
    NanoCamo - Camo stealth address toolkit

    Deriva address camo_, negozia versioni e calcola pagamenti stealth.
    """
    settings = get_settings()
    setup_logging_from_settings(settings)
    if verbose:
        console.print("[dim]Verbose mode enabled[/dim]")


if __name__ == "__main__":
    app()


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "app",
]
