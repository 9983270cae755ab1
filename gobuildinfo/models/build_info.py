"""Build-info manifest models.

A ``BuildInfo`` is assembled once per build invocation and handed to the
build store. ``Partial`` records carry artifacts registered separately from
the dependency collection.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from gobuildinfo.models.artifacts import Artifact
from gobuildinfo.models.dependencies import Dependency


class ModuleType(str, Enum):
    """Build system tag recorded on every module."""

    GO = "go"


class Module(BaseModel):
    """A single build-info module and its dependencies."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ModuleType = ModuleType.GO
    dependencies: list[Dependency] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)


class BuildInfo(BaseModel):
    """The complete manifest for one build name/number."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    number: str = ""
    project: str = ""
    started: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    modules: list[Module] = Field(default_factory=list)


class Partial(BaseModel):
    """A piece of build-info saved outside the main dependency collection."""

    model_config = ConfigDict(frozen=True)

    module_id: str
    module_type: ModuleType = ModuleType.GO
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    dependencies: list[Dependency] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)
