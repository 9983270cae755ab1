"""gobuildinfo CLI — Typer-based command-line interface.

Provides the ``gobuildinfo`` command with subcommands for running a go
build with build-info collection, inspecting stored manifests, and
registering build artifacts.

All output uses Rich for formatted terminal display.
"""
