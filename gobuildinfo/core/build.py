"""Build context shared by every module collector.

A ``Build`` carries the build identification, the store that persists
manifests, the logger and the Go toolchain. It is passed explicitly to each
``GoModule``; nothing in the collector reads global state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from gobuildinfo.core.build_store import BuildStore
from gobuildinfo.core.go_toolchain import GoCommandToolchain, GoToolchain
from gobuildinfo.models.build_info import BuildInfo, Partial

logger = logging.getLogger(__name__)


class BuildInfoError(RuntimeError):
    """Raised when an operation needs build identification that is missing."""


class Build:
    """Build identification plus the collaborators a collection needs.

    Parameters
    ----------
    build_name, build_number:
        Identify the build. When either is empty, dependency collection is
        skipped and artifact registration fails.
    project:
        Optional project key recorded on the manifest.
    store:
        Where manifests are saved. Defaults to ``BuildStore()``.
    toolchain:
        Go toolchain collaborator. Defaults to ``GoCommandToolchain()``.
    build_logger:
        Logger used by every component working on this build.
    """

    def __init__(
        self,
        build_name: str = "",
        build_number: str = "",
        project: str = "",
        *,
        store: BuildStore | None = None,
        toolchain: GoToolchain | None = None,
        build_logger: logging.Logger | None = None,
    ) -> None:
        self.build_name = build_name
        self.build_number = build_number
        self.project = project
        self.store = store or BuildStore()
        self.toolchain: GoToolchain = toolchain or GoCommandToolchain()
        self.logger = build_logger or logger
        self.started = datetime.now(timezone.utc)

    def build_name_and_number_provided(self) -> bool:
        return bool(self.build_name) and bool(self.build_number)

    def _require_identification(self, action: str) -> None:
        if not self.build_name_and_number_provided():
            raise BuildInfoError(
                f"build name and build number must be provided in order to {action}"
            )

    def add_go_module(self, src_path: Path | str | None = None):
        """Create a ``GoModule`` collector bound to this build."""
        from gobuildinfo.core.go_module import GoModule

        return GoModule(Path(src_path) if src_path else None, self)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_build_info(self, build_info: BuildInfo) -> Path:
        """Stamp the manifest with this build's identity and persist it."""
        self._require_identification("save build-info")
        stamped = build_info.model_copy(
            update={
                "name": self.build_name,
                "number": self.build_number,
                "project": self.project,
                "started": self.started,
            }
        )
        path = self.store.save_build_info(stamped)
        self.logger.info(
            "Saved build-info for %s/%s (%d module(s)) to %s",
            self.build_name,
            self.build_number,
            len(stamped.modules),
            path,
        )
        return path

    def save_partial_build_info(self, partial: Partial) -> Path:
        self._require_identification("save partial build-info")
        path = self.store.save_partial(self.build_name, self.build_number, partial)
        self.logger.info("Saved partial build-info for module %s", partial.module_id)
        return path
