"""``gobuildinfo go ARGS...`` — run a go command and collect build-info.

Runs ``go ARGS...`` in the module directory. When a build name and number
are configured, records the module's dependencies and saves the manifest to
the build store.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from gobuildinfo.config import settings
from gobuildinfo.core.build import Build, BuildInfoError
from gobuildinfo.core.build_store import BuildStore
from gobuildinfo.core.go_toolchain import GoCommandError, GoCommandToolchain, GoModuleError

console = Console()


def go_cmd(
    go_args: list[str] = typer.Argument(
        None,
        help="Arguments passed to the go command, e.g. 'build ./...'.",
    ),
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
    project: str = typer.Option(
        None,
        "--project",
        "-p",
        help="Project key recorded on the manifest.",
    ),
    module_name: str = typer.Option(
        None,
        "--module",
        "-m",
        help="Override the module id recorded in the manifest.",
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
    """Run a go command and record the module's dependencies."""
    build = Build(
        build_name or settings.build_name,
        build_number or settings.build_number,
        project or settings.project,
        store=BuildStore(store_dir or settings.store_path),
        toolchain=GoCommandToolchain(
            settings.go_executable, timeout=settings.go_command_timeout
        ),
    )

    try:
        go_module = build.add_go_module(src_dir)
        if module_name:
            go_module.set_name(module_name)
        go_module.set_args(go_args or [])
        manifest_path = go_module.build()
    except GoCommandError as exc:
        console.print(f"[bold red]go command failed:[/bold red] {exc}")
        raise typer.Exit(code=exc.returncode or 1)
    except (GoModuleError, BuildInfoError, OSError) as exc:
        console.print(f"[bold red]Build-info collection failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if manifest_path is None:
        console.print(
            "[dim]Build name and number not set; build-info was not collected.[/dim]"
        )
        return

    build_info = build.store.load_build_info(build.build_name, build.build_number)
    dependency_count = sum(len(m.dependencies) for m in build_info.modules)
    module_ids = ", ".join(m.id for m in build_info.modules)

    console.print()
    console.print(
        Panel(
            "\n".join([
                "[bold green]Build-info collected![/bold green]",
                "",
                f"[bold]Build:[/bold]         {build.build_name}/{build.build_number}",
                f"[bold]Module:[/bold]        {module_ids}",
                f"[bold]Dependencies:[/bold]  {dependency_count}",
                f"[bold]Manifest:[/bold]      {manifest_path}",
            ]),
            title="[bold]gobuildinfo[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
