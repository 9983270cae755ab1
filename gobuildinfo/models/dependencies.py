"""Dependency models: a cached module archive and how it was requested."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Dependencies are recorded as the module's .zip archive from the module cache.
ZIP_DEPENDENCY_TYPE = "zip"


class Checksum(BaseModel):
    """The checksum triple recorded for every dependency and artifact."""

    model_config = ConfigDict(frozen=True)

    md5: str
    sha1: str
    sha256: str

    def is_empty(self) -> bool:
        return not (self.md5 or self.sha1 or self.sha256)


class Dependency(BaseModel):
    """A module archive the build depended on.

    ``requested_by`` holds one request chain per path from the root module.
    Each chain starts with the immediate requester and ends with the root.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: str = ZIP_DEPENDENCY_TYPE
    checksum: Checksum | None = None
    requested_by: list[list[str]] = Field(default_factory=list)
