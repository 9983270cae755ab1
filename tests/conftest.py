"""Shared test fixtures for gobuildinfo."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from gobuildinfo.core.build import Build
from gobuildinfo.core.build_store import BuildStore
from gobuildinfo.core.codec import encode
from gobuildinfo.core.go_toolchain import GoCommandError


class FakeToolchain:
    """In-memory ``GoToolchain`` that records how it was called."""

    def __init__(
        self,
        *,
        module_name: str = "example.com/app",
        cache_path: Path | None = None,
        modules: Sequence[str] = (),
        graph: dict[str, list[str]] | None = None,
        package: tuple[str, Path] | None = None,
        go_exit_code: int | None = None,
    ) -> None:
        self._module_name = module_name
        self._cache_path = cache_path or Path("/nonexistent/cache/download")
        self._modules = list(modules)
        self._graph = graph or {}
        self._package = package
        self._go_exit_code = go_exit_code
        self.go_calls: list[list[str]] = []
        self.listed_paths: list[Path] = []
        self.staged_go_mod_seen: list[bool] = []

    def run_go(self, args: Sequence[str], cwd: Path | None = None) -> None:
        self.go_calls.append(list(args))
        if self._go_exit_code is not None:
            raise GoCommandError(["go", *args], self._go_exit_code)

    def module_name(self, src_path: Path) -> str:
        return self._module_name

    def cache_path(self) -> Path:
        return self._cache_path

    def dependencies_list(self, src_path: Path) -> dict[str, str]:
        self.listed_paths.append(Path(src_path))
        self.staged_go_mod_seen.append((Path(src_path) / "go.mod").exists())
        return {module_id: module_id.rpartition(":")[2] for module_id in self._modules}

    def dependencies_graph(self, src_path: Path) -> dict[str, list[str]]:
        return self._graph

    def package_path_and_dir(self, src_path: Path, package: str) -> tuple[str, Path]:
        if self._package is None:
            raise AssertionError(f"unexpected package lookup for {package}")
        return self._package


@pytest.fixture
def make_toolchain() -> Callable[..., FakeToolchain]:
    """Factory fixture: build a FakeToolchain."""
    return FakeToolchain


@pytest.fixture
def logger() -> logging.Logger:
    """Provide the logger passed into core functions."""
    return logging.getLogger("gobuildinfo.tests")


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    """Provide a module download cache root: {GOMODCACHE}/cache/download."""
    root = tmp_path / "gomodcache" / "cache" / "download"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def make_archive() -> Callable[..., Path]:
    """Factory fixture: write a module zip under a cache root.

    ``module_id`` is the unencoded "path:version" form.
    """

    def _factory(root: Path, module_id: str, content: bytes = b"zip-bytes") -> Path:
        name, _, version = encode(module_id).rpartition(":")
        zip_path = root / name / "@v" / f"{version}.zip"
        zip_path.parent.mkdir(parents=True, exist_ok=True)
        zip_path.write_bytes(content)
        return zip_path

    return _factory


@pytest.fixture
def store(tmp_path: Path) -> BuildStore:
    """Provide a BuildStore in a temp directory."""
    return BuildStore(tmp_path / "builds")


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    """Provide a module source directory with a go.mod."""
    path = tmp_path / "src"
    path.mkdir()
    (path / "go.mod").write_text("module example.com/app\n\ngo 1.22\n")
    return path


@pytest.fixture
def make_build(store: BuildStore) -> Callable[..., Build]:
    """Factory fixture: a Build wired to the test store and a fake toolchain."""

    def _factory(
        toolchain: FakeToolchain,
        build_name: str = "svc",
        build_number: str = "1",
    ) -> Build:
        return Build(build_name, build_number, store=store, toolchain=toolchain)

    return _factory
