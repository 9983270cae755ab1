"""Main Typer application — imports and registers all CLI commands.

Entry point: ``gobuildinfo`` (configured via pyproject.toml project.scripts).

Commands: go, show, add-artifact.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from gobuildinfo.cli.commands.artifacts import add_artifact_cmd
from gobuildinfo.cli.commands.collect import go_cmd
from gobuildinfo.cli.commands.show import show_cmd
from gobuildinfo.config import settings

app = typer.Typer(
    name="gobuildinfo",
    help="gobuildinfo: verifiable build-info manifests for Go modules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging."
    ),
) -> None:
    """Collect build-info for Go modules."""
    configure_logging("DEBUG" if verbose else settings.log_level)


# Register subcommands
app.command(
    name="go",
    help="Run a go command and collect build-info.",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)(go_cmd)
app.command(name="show", help="Show a stored build-info manifest.")(show_cmd)
app.command(name="add-artifact", help="Record build outputs as module artifacts.")(
    add_artifact_cmd
)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
