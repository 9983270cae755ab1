"""Artifact models — build outputs declared after the build (immutable)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from gobuildinfo.models.dependencies import Checksum


class Artifact(BaseModel):
    """A file produced by the build, identified by its checksums."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = ""
    path: str = ""
    checksum: Checksum | None = None
