"""``gobuildinfo add-artifact PATH...`` — register build outputs.

Each file is checksummed and saved as an artifact of the module in a
partial build-info. Requires a build name and number.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from gobuildinfo.config import settings
from gobuildinfo.core.build import Build, BuildInfoError
from gobuildinfo.core.build_store import BuildStore
from gobuildinfo.core.go_toolchain import GoCommandToolchain, GoModuleError
from gobuildinfo.core.hasher import file_checksums
from gobuildinfo.models.artifacts import Artifact

console = Console()


def _artifact_for(path: Path) -> Artifact:
    return Artifact(
        name=path.name,
        type=path.suffix.lstrip("."),
        path=str(path),
        checksum=file_checksums(path),
    )


def add_artifact_cmd(
    paths: list[Path] = typer.Argument(..., help="Files produced by the build."),
    build_name: str = typer.Option(
        None,
        "--build-name",
        "-n",
        help="Build name. Defaults to GOBUILDINFO_BUILD_NAME.",
    ),
    build_number: str = typer.Option(
        None,
        "--build-number",
        "-b",
        help="Build number. Defaults to GOBUILDINFO_BUILD_NUMBER.",
    ),
    module_name: str = typer.Option(
        None,
        "--module",
        "-m",
        help="Module id the artifacts belong to. Defaults to the go.mod module.",
    ),
    src_dir: Path = typer.Option(
        None,
        "--src",
        help="Module directory. Defaults to the nearest go.mod above the cwd.",
    ),
    store_dir: Path = typer.Option(
        None,
        "--store",
        "-s",
        help="Build store directory. Defaults to GOBUILDINFO_STORE_PATH.",
    ),
) -> None:
    """Checksum build outputs and record them as module artifacts."""
    build = Build(
        build_name or settings.build_name,
        build_number or settings.build_number,
        settings.project,
        store=BuildStore(store_dir or settings.store_path),
        toolchain=GoCommandToolchain(settings.go_executable),
    )

    try:
        go_module = build.add_go_module(src_dir)
        if module_name:
            go_module.set_name(module_name)
        artifacts = [_artifact_for(path) for path in paths]
        partial_path = go_module.add_artifacts(*artifacts)
    except (GoModuleError, BuildInfoError, OSError) as exc:
        console.print(f"[bold red]Cannot add artifacts:[/bold red] {exc}")
        raise typer.Exit(code=1)

    for artifact in artifacts:
        console.print(f"[green]+[/green] {artifact.name}  [dim]{artifact.checksum.sha256}[/dim]")
    console.print(f"[dim]Recorded in {partial_path}[/dim]")
