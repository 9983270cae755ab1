"""File-backed store for build-info manifests and partials.

Layout:
    {base_path}/{build_name}/{build_number}/build-info.json
    {base_path}/{build_name}/{build_number}/partials/{timestamp}-{module}.json

Manifests are written as canonical JSON so identical builds produce
identical bytes.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path

from gobuildinfo.core.hasher import canonical_json_bytes
from gobuildinfo.models.build_info import BuildInfo, Partial

logger = logging.getLogger(__name__)

BUILD_INFO_FILE = "build-info.json"
PARTIALS_DIR = "partials"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_segment(value: str) -> str:
    """Make a build name, number or module id usable as a path segment."""
    return _UNSAFE_CHARS.sub("_", value) or "_"


class BuildStore:
    """Writes and reads build-info documents under a base directory.

    Parameters
    ----------
    base_path:
        Root directory for stored builds. Defaults to ``.gobuildinfo/builds``.
    """

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base = Path(base_path) if base_path else Path(".gobuildinfo/builds")

    @property
    def base_path(self) -> Path:
        return self._base

    def build_dir(self, build_name: str, build_number: str) -> Path:
        return self._base / _safe_segment(build_name) / _safe_segment(build_number)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save_build_info(self, build_info: BuildInfo) -> Path:
        """Write the manifest, replacing any previous one for the same build."""
        target_dir = self.build_dir(build_info.name, build_info.number)
        target_dir.mkdir(parents=True, exist_ok=True)
        target_file = target_dir / BUILD_INFO_FILE
        target_file.write_bytes(canonical_json_bytes(build_info.model_dump(mode="json")))
        logger.debug("BuildStore: wrote build-info to %s", target_file)
        return target_file

    def save_partial(self, build_name: str, build_number: str, partial: Partial) -> Path:
        """Write a partial next to the build's manifest."""
        target_dir = self.build_dir(build_name, build_number) / PARTIALS_DIR
        target_dir.mkdir(parents=True, exist_ok=True)
        stamp = partial.timestamp.strftime("%Y%m%dT%H%M%S%fZ")
        target_file = target_dir / f"{stamp}-{_safe_segment(partial.module_id)}.json"
        target_file.write_bytes(canonical_json_bytes(partial.model_dump(mode="json")))
        logger.debug("BuildStore: wrote partial to %s", target_file)
        return target_file

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load_build_info(self, build_name: str, build_number: str) -> BuildInfo:
        """Read a stored manifest. Raises FileNotFoundError if absent."""
        path = self.build_dir(build_name, build_number) / BUILD_INFO_FILE
        if not path.exists():
            raise FileNotFoundError(f"No build-info for {build_name}/{build_number}")
        return BuildInfo.model_validate(json.loads(path.read_bytes()))

    def list_partials(self, build_name: str, build_number: str) -> list[Partial]:
        """Return all partials for a build in the order they were written."""
        partials_dir = self.build_dir(build_name, build_number) / PARTIALS_DIR
        if not partials_dir.exists():
            return []
        return [
            Partial.model_validate(json.loads(path.read_bytes()))
            for path in sorted(partials_dir.glob("*.json"))
        ]
