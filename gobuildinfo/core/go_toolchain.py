"""Go toolchain collaborators.

Everything the collector needs from the ``go`` command goes through the
``GoToolchain`` protocol: running the user's build, reading the module name,
finding the module cache, listing the modules in use and reading the
requirement graph. ``GoCommandToolchain`` is the default implementation and
shells out to ``go``. Tests substitute their own.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

_GO_MOD = "go.mod"

# One line per package: "<module path>:<module version>". Packages of the
# main module print an empty version and are dropped.
_LIST_MODULES_TEMPLATE = "{{with .Module}}{{.Path}}:{{.Version}}{{end}}"


class GoCommandError(RuntimeError):
    """Raised when a go invocation exits with a non-zero status.

    The exit status is kept on the exception rather than flattened into the
    message, so callers can propagate it.
    """

    def __init__(
        self,
        args: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        command = " ".join(self.args_list)
        if returncode is None:
            message = f"'{command}' could not be started"
        else:
            message = f"'{command}' exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)


class GoModuleError(ValueError):
    """Raised when a Go module cannot be identified or located."""


@runtime_checkable
class GoToolchain(Protocol):
    """What the collector consumes from the Go toolchain."""

    def run_go(self, args: Sequence[str], cwd: Path | None = None) -> None: ...

    def module_name(self, src_path: Path) -> str: ...

    def cache_path(self) -> Path: ...

    def dependencies_list(self, src_path: Path) -> dict[str, str]: ...

    def dependencies_graph(self, src_path: Path) -> dict[str, list[str]]: ...

    def package_path_and_dir(self, src_path: Path, package: str) -> tuple[str, Path]: ...


def find_project_root(start: Path | None = None) -> Path:
    """Walk up from ``start`` (default: cwd) to the directory holding go.mod."""
    current = Path(start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / _GO_MOD).is_file():
            return candidate
    raise GoModuleError(f"Could not find a {_GO_MOD} file in {current} or its parents")


def parse_module_directive(go_mod_text: str) -> str | None:
    """Return the module path declared in go.mod text, or None."""
    for raw_line in go_mod_text.splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line.startswith("module"):
            continue
        fields = line.split(None, 1)
        if len(fields) == 2 and fields[0] == "module":
            return fields[1].strip().strip('"`')
    return None


def parse_dependencies_list(output: str) -> dict[str, str]:
    """Parse ``go list`` module lines into ``{"path:version": "version"}``.

    Lines without a version (the main module, standard library) are skipped.
    Order of first appearance is kept.
    """
    modules: dict[str, str] = {}
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        path, sep, version = line.rpartition(":")
        if not sep or not path or not version:
            continue
        modules.setdefault(line, version)
    return modules


def _graph_node_id(token: str) -> str:
    name, sep, version = token.partition("@")
    return f"{name}:{version}" if sep else name


def parse_dependencies_graph(output: str) -> dict[str, list[str]]:
    """Parse ``go mod graph`` output into an ordered adjacency mapping.

    Each line is ``<requirer> <required>``; ``path@version`` becomes
    ``path:version`` so graph keys match the dependency list.
    """
    graph: dict[str, list[str]] = {}
    for line in output.splitlines():
        fields = line.split()
        if len(fields) != 2:
            continue
        parent, child = (_graph_node_id(f) for f in fields)
        graph.setdefault(parent, []).append(child)
    return graph


class GoCommandToolchain:
    """``GoToolchain`` backed by the ``go`` executable.

    Parameters
    ----------
    go_executable:
        Name or path of the go binary.
    timeout:
        Seconds allowed for each query command. The user's build itself is
        never timed out.
    """

    def __init__(self, go_executable: str = "go", timeout: int | None = None) -> None:
        self._go = go_executable
        self._timeout = timeout

    def _command(self, args: Sequence[str]) -> list[str]:
        return [self._go, *args]

    def _query(self, args: Sequence[str], cwd: Path | None) -> str:
        """Run a go query command and return its stdout."""
        command = self._command(args)
        logger.debug("Running: %s (cwd=%s)", " ".join(command), cwd)
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise GoCommandError(command, None, str(exc)) from exc
        if result.returncode != 0:
            raise GoCommandError(command, result.returncode, result.stderr)
        return result.stdout

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def run_go(self, args: Sequence[str], cwd: Path | None = None) -> None:
        """Run the user's go command with output going straight to the terminal."""
        command = self._command(args)
        logger.info("Running: %s", " ".join(command))
        try:
            result = subprocess.run(command, cwd=cwd)
        except FileNotFoundError as exc:
            raise GoCommandError(command, None, str(exc)) from exc
        if result.returncode != 0:
            raise GoCommandError(command, result.returncode)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def module_name(self, src_path: Path) -> str:
        """Read the module path from ``src_path``/go.mod."""
        go_mod = Path(src_path) / _GO_MOD
        try:
            text = go_mod.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise GoModuleError(f"No {_GO_MOD} found in {src_path}") from exc
        name = parse_module_directive(text)
        if not name:
            raise GoModuleError(f"{go_mod} has no module directive")
        logger.debug("Module name for %s: %s", src_path, name)
        return name

    def cache_path(self) -> Path:
        """Return the module download cache: $GOMODCACHE/cache/download."""
        gomodcache = self._query(["env", "GOMODCACHE"], None).strip()
        if not gomodcache:
            raise GoModuleError("go env GOMODCACHE returned an empty path")
        return Path(gomodcache) / "cache" / "download"

    def dependencies_list(self, src_path: Path) -> dict[str, str]:
        output = self._query(
            ["list", "-mod=mod", "-e", "-f", _LIST_MODULES_TEMPLATE, "all"], src_path
        )
        return parse_dependencies_list(output)

    def dependencies_graph(self, src_path: Path) -> dict[str, list[str]]:
        return parse_dependencies_graph(self._query(["mod", "graph"], src_path))

    def package_path_and_dir(self, src_path: Path, package: str) -> tuple[str, Path]:
        """Return the module path and extracted cache directory for ``package``."""
        output = self._query(["list", "-mod=mod", "-m", "-json", package], src_path)
        try:
            info = json.loads(output)
        except json.JSONDecodeError as exc:
            raise GoModuleError(f"Unexpected go list output for {package}: {exc}") from exc
        module_path = info.get("Path", "")
        module_dir = info.get("Dir", "")
        if not module_path or not module_dir:
            raise GoModuleError(f"Module files for {package} are not in the module cache")
        return module_path, Path(module_dir)
