"""gobuildinfo data models — all Pydantic v2, all frozen (immutable)."""

from gobuildinfo.models.artifacts import Artifact
from gobuildinfo.models.build_info import BuildInfo, Module, ModuleType, Partial
from gobuildinfo.models.dependencies import ZIP_DEPENDENCY_TYPE, Checksum, Dependency

__all__ = [
    # dependencies
    "Checksum",
    "Dependency",
    "ZIP_DEPENDENCY_TYPE",
    # artifacts
    "Artifact",
    # build info
    "BuildInfo",
    "Module",
    "ModuleType",
    "Partial",
]
