"""Go module collector — runs the build and records its dependencies.

``GoModule.build()`` sequences the collection:

1. Run ``go <args>`` when args were given. A failing go command ends the
   collection before anything is recorded.
2. Return without collecting when the build is not identified.
3. For ``go get <package>``, stage the package's module files in a
   temporary directory and collect from there instead of the source tree.
4. Load the dependency list and the requirement graph, locate and checksum
   each cached archive, and propagate request chains from the module.
5. Save the manifest through the build.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from gobuildinfo.core.build import Build, BuildInfoError
from gobuildinfo.core.cache_locator import locate
from gobuildinfo.core.codec import encode
from gobuildinfo.core.dependency_graph import (
    dependencies_map_to_list,
    populate_requested_by,
)
from gobuildinfo.core.enricher import populate_zip
from gobuildinfo.core.go_toolchain import GoModuleError, find_project_root
from gobuildinfo.core.workspace import copy_dir, staging_directory
from gobuildinfo.models.artifacts import Artifact
from gobuildinfo.models.build_info import BuildInfo, Module, ModuleType, Partial
from gobuildinfo.models.dependencies import Dependency


class GoModule:
    """Collects build-info for one Go module.

    Parameters
    ----------
    src_path:
        Module source directory. Defaults to the nearest directory above the
        working directory that contains go.mod.
    build:
        The build context this module belongs to.
    """

    def __init__(self, src_path: Path | None, build: Build) -> None:
        self._build = build
        self._src_path = Path(src_path) if src_path else find_project_root()
        self._name = build.toolchain.module_name(self._src_path)
        self._go_args: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def src_path(self) -> Path:
        return self._src_path

    def set_name(self, name: str) -> None:
        """Override the module id recorded in the manifest."""
        self._name = name

    def set_args(self, go_args: Sequence[str]) -> None:
        self._go_args = list(go_args)

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def build(self) -> Path | None:
        """Run the go command and save the build-info.

        Returns the path of the saved manifest, or None when the build is
        not identified and nothing was collected.
        """
        toolchain = self._build.toolchain
        is_get_command = False
        if self._go_args:
            toolchain.run_go(self._go_args, cwd=self._src_path)
            is_get_command = self._go_args[0] == "get"

        if not self._build.build_name_and_number_provided():
            self._build.logger.debug(
                "Build name and number not provided; skipping build-info collection"
            )
            return None

        if not is_get_command:
            dependencies = self.load_dependencies(self._src_path, self._name)
            return self._save(self._name, dependencies)

        if len(self._go_args) < 2:
            raise GoModuleError("package name is missing")
        with staging_directory() as temp_dir:
            module_name = self._stage_get_package(temp_dir)
            dependencies = self.load_dependencies(temp_dir, module_name)
            return self._save(module_name, dependencies)

    def _save(self, module_id: str, dependencies: list[Dependency]) -> Path:
        module = Module(id=module_id, type=ModuleType.GO, dependencies=dependencies)
        return self._build.save_build_info(BuildInfo(modules=[module]))

    def _stage_get_package(self, dest_path: Path) -> str:
        """Copy the requested package's module files to ``dest_path``.

        Returns the package's module path, used as the module id.
        """
        package_name = next(
            (arg for arg in self._go_args[1:] if not arg.startswith("-")), ""
        )
        if not package_name:
            raise GoModuleError("package name is missing")
        module_path, package_dir = self._build.toolchain.package_path_and_dir(
            self._src_path, package_name
        )
        try:
            copy_dir(package_dir, dest_path)
        except OSError as exc:
            raise GoModuleError(
                f"Couldn't find suitable package files: {package_dir}"
            ) from exc
        self._build.logger.debug("Staged %s from %s", module_path, package_dir)
        return module_path

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    def add_artifacts(self, *artifacts: Artifact) -> Path:
        """Record build outputs for this module as a partial build-info."""
        if not self._build.build_name_and_number_provided():
            raise BuildInfoError(
                "build name and build number must be provided in order to add artifacts"
            )
        partial = Partial(
            module_id=self._name,
            module_type=ModuleType.GO,
            artifacts=list(artifacts),
        )
        return self._build.save_partial_build_info(partial)

    # ------------------------------------------------------------------
    # Dependencies
    # ------------------------------------------------------------------

    def load_dependencies(self, src_path: Path, parent_id: str) -> list[Dependency]:
        """Collect the dependencies of the module at ``src_path``.

        ``parent_id`` is the root of the requirement graph, normally the
        module path as printed by ``go mod graph``.
        """
        toolchain = self._build.toolchain
        cache_path = toolchain.cache_path()
        graph = toolchain.dependencies_graph(src_path)
        dependencies = self.go_dependencies(cache_path, src_path)
        resolved = populate_requested_by(parent_id, dependencies, graph)
        return dependencies_map_to_list(resolved)

    def go_dependencies(self, cache_path: Path, src_path: Path) -> dict[str, Dependency]:
        """Map each listed module to its zip dependency.

        Modules without an archive in the cache are left out.
        """
        logger = self._build.logger
        modules = self._build.toolchain.dependencies_list(src_path)
        dependencies: dict[str, Dependency] = {}
        for module_id in modules:
            encoded_id = encode(module_id)
            zip_path = locate(cache_path, encoded_id, logger)
            if zip_path is None:
                continue
            dependencies[module_id] = populate_zip(encoded_id, zip_path)
        logger.debug(
            "Found %d of %d module archive(s) in %s",
            len(dependencies),
            len(modules),
            cache_path,
        )
        return dependencies
