"""CLI entry point for script-sandbox.

Invoked as::

    script-sandbox [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m script_sandbox.cli.main

Commands
--------
- check     Parse a definition file and report per-kind counts
- exists    List signatures whose member cannot be found
- evaluate  Decide one signature against a definition file
- sort      Print a definition file in presentation order
- version   Show version information
"""
from __future__ import annotations

import sys
from collections import Counter
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from script_sandbox.errors import SignatureParseError
from script_sandbox.signatures.model import Signature, SignatureKind
from script_sandbox.signatures.parser import format_signatures, parse_line
from script_sandbox.whitelist import Whitelist
from script_sandbox.whitelists.blacklist import Blacklist
from script_sandbox.whitelists.static import StaticWhitelist

console = Console()
err_console = Console(stderr=True)


def _load(definition: str) -> StaticWhitelist:
    try:
        return StaticWhitelist.from_path(Path(definition))
    except SignatureParseError as exc:
        err_console.print(f"[red]Invalid definition:[/red] {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="script-sandbox")
def cli() -> None:
    """Script sandbox CLI — inspect and evaluate signature definition files."""


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from script_sandbox import __version__

    console.print(
        Panel(
            f"[bold]script-sandbox[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Signature-based access control for sandboxed scripts.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check
# ---------------------------------------------------------------------------


@cli.command(name="check")
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
def check_command(definition: str) -> None:
    """Parse DEFINITION and report how many signatures of each kind it holds."""
    whitelist = _load(definition)
    counts = Counter(sig.kind for sig in whitelist.signatures())

    table = Table(title=f"Signatures in {definition}", box=box.SIMPLE)
    table.add_column("Kind", style="cyan")
    table.add_column("Count", justify="right")
    for kind in SignatureKind:
        table.add_row(kind.value, str(counts.get(kind, 0)))
    console.print(table)
    console.print(f"[green]VALID[/green] {whitelist.signature_count} signatures")


# ---------------------------------------------------------------------------
# exists
# ---------------------------------------------------------------------------


@cli.command(name="exists")
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--fail/--no-fail",
    default=False,
    show_default=True,
    help="Exit with status 1 when any signature is missing.",
)
def exists_command(definition: str, fail: bool) -> None:
    """List signatures in DEFINITION whose type or member cannot be found."""
    whitelist = _load(definition)
    missing = [sig for sig in whitelist.signatures() if not sig.exists()]

    if not missing:
        console.print("[green]All signatures resolve.[/green]")
        return

    table = Table(title="Unresolved signatures", box=box.SIMPLE)
    table.add_column("Signature", style="yellow")
    for sig in missing:
        table.add_row(escape(str(sig)))
    console.print(table)
    console.print(f"{len(missing)} of {whitelist.signature_count} signatures do not resolve.")
    if fail:
        sys.exit(1)


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------


def _decide(whitelist: Whitelist, sig: Signature) -> bool:
    call = sig.as_call()
    if sig.kind is SignatureKind.METHOD:
        return whitelist.permits_method(call)
    if sig.kind is SignatureKind.STATIC_METHOD:
        return whitelist.permits_static_method(call)
    if sig.kind is SignatureKind.NEW:
        return whitelist.permits_constructor(call)
    if sig.kind is SignatureKind.FIELD:
        return whitelist.permits_field_get(call)
    return whitelist.permits_static_field_get(call)


def _reject(sig: Signature) -> str:
    call = sig.as_call()
    rejectors = {
        SignatureKind.METHOD: StaticWhitelist.reject_method,
        SignatureKind.STATIC_METHOD: StaticWhitelist.reject_static_method,
        SignatureKind.NEW: StaticWhitelist.reject_new,
        SignatureKind.FIELD: StaticWhitelist.reject_field,
        SignatureKind.STATIC_FIELD: StaticWhitelist.reject_static_field,
    }
    return str(rejectors[sig.kind](call))


@cli.command(name="evaluate")
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.argument("signature")
@click.option(
    "--deny",
    is_flag=True,
    default=False,
    help="Treat DEFINITION as a deny-list instead of an allow-list.",
)
def evaluate_command(definition: str, signature: str, deny: bool) -> None:
    """Decide SIGNATURE (canonical text) against DEFINITION."""
    try:
        sig = parse_line(signature)
    except SignatureParseError as exc:
        err_console.print(f"[red]Invalid signature:[/red] {escape(str(exc))}")
        sys.exit(2)
    if sig.is_wildcard:
        err_console.print("[red]Invalid signature:[/red] wildcards describe entries, not calls")
        sys.exit(2)

    listed = _load(definition)
    whitelist: Whitelist = Blacklist(listed) if deny else listed
    allowed = _decide(whitelist, sig)

    status = "[green]ALLOWED[/green]" if allowed else "[red]REJECTED[/red]"
    console.print(Panel(status, title="Sandbox Decision", border_style="blue"))
    if not allowed:
        console.print(f"  {escape(_reject(sig))}")
    if StaticWhitelist.is_permanently_blacklisted(sig):
        console.print("  [bold red]Permanently blacklisted:[/bold red] cannot be approved.")

    sys.exit(0 if allowed else 1)


# ---------------------------------------------------------------------------
# sort
# ---------------------------------------------------------------------------


@cli.command(name="sort")
@click.argument("definition", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the sorted definition here instead of standard output.",
)
def sort_command(definition: str, output: str | None) -> None:
    """Print DEFINITION in presentation order, one canonical signature per line."""
    whitelist = _load(definition)
    text = format_signatures(whitelist.signatures())
    if output is None:
        click.echo(text, nl=False)
        return
    Path(output).write_text(text, encoding="utf-8")
    console.print(f"[green]Wrote[/green] {whitelist.signature_count} signatures to [bold]{output}[/bold]")


if __name__ == "__main__":
    cli()
