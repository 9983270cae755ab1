"""``gobuildinfo show NAME NUMBER`` — display a stored manifest."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gobuildinfo.config import settings
from gobuildinfo.core.build_store import BuildStore
from gobuildinfo.core.codec import decode
from gobuildinfo.models.build_info import Module

console = Console()


def _format_chain(chain: list[str]) -> str:
    return " <- ".join(chain) if chain else "(root)"


def _dependency_table(module: Module, show_chains: bool) -> Table:
    table = Table(title=f"{module.id} ({module.type.value})")
    table.add_column("Dependency", style="cyan")
    table.add_column("SHA-256", style="green")
    table.add_column("Requested by")

    for dep in module.dependencies:
        sha256 = (
            dep.checksum.sha256[:16]
            if dep.checksum and not dep.checksum.is_empty()
            else "-"
        )
        if show_chains:
            requested = "\n".join(_format_chain(c) for c in dep.requested_by) or "[dim]-[/dim]"
        else:
            requested = f"{len(dep.requested_by)} chain(s)"
        # Record ids are cache-encoded; print the module path as go spells it
        table.add_row(decode(dep.id), sha256, requested)
    return table


def show_cmd(
    build_name: str = typer.Argument(..., help="Build name."),
    build_number: str = typer.Argument(..., help="Build number."),
    chains: bool = typer.Option(
        False,
        "--chains/--no-chains",
        help="Print every request chain instead of a count.",
    ),
    store_dir: Path = typer.Option(
        None,
        "--store",
        "-s",
        help="Build store directory. Defaults to GOBUILDINFO_STORE_PATH.",
    ),
) -> None:
    """Show the dependencies and artifacts recorded for a build."""
    store = BuildStore(store_dir or settings.store_path)
    try:
        build_info = store.load_build_info(build_name, build_number)
    except FileNotFoundError as exc:
        console.print(f"[bold red]Not found:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print()
    console.print(
        f"[bold]Build[/bold] {build_info.name}/{build_info.number}"
        f"  [dim]started {build_info.started.isoformat()}[/dim]"
    )
    for module in build_info.modules:
        console.print(_dependency_table(module, chains))

    partials = store.list_partials(build_name, build_number)
    artifacts = [(p.module_id, a) for p in partials for a in p.artifacts]
    if artifacts:
        table = Table(title="Artifacts")
        table.add_column("Module", style="cyan")
        table.add_column("Name")
        table.add_column("SHA-256", style="green")
        for module_id, artifact in artifacts:
            sha256 = artifact.checksum.sha256[:16] if artifact.checksum else "-"
            table.add_row(module_id, artifact.name, sha256)
        console.print(table)
