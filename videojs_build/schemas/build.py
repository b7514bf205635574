"""Pydantic models describing build inputs and the bundler configuration."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, FrozenSet, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

OutputFormat = Literal["umd", "es", "cjs"]
OUTPUT_FORMATS: Tuple[str, ...] = ("umd", "es", "cjs")


class StagePhase(IntEnum):
    """Pipeline position of a transform stage; stages must not go backwards."""

    REWRITE = 0
    RESOLVE = 1
    INTEROP = 2
    DOWNLEVEL = 3
    EMBED = 4


class PackageMetadata(BaseModel):
    version: str
    copyright: str = ""

    model_config = ConfigDict(extra="ignore", frozen=True)


class BuildOptions(BaseModel):
    features: FrozenSet[str] = Field(default_factory=frozenset)
    output: Optional[str] = None
    format: OutputFormat = "umd"
    dry_run: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class OutputDescriptor(BaseModel):
    format: OutputFormat
    file: str
    name: str = "videojs"
    banner: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class StageDescriptor(BaseModel):
    name: str
    phase: StagePhase
    plugin: Optional[str] = Field(
        default=None,
        description="npm package providing the plugin; None for an inline exclusion stage.",
    )
    options: Any = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class BundleConfig(BaseModel):
    input: str
    output: OutputDescriptor
    external: List[str] = Field(default_factory=list)
    stages: Tuple[StageDescriptor, ...] = ()

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_stage_order(self) -> "BundleConfig":
        previous: Optional[StageDescriptor] = None
        for stage in self.stages:
            if previous is not None and stage.phase < previous.phase:
                raise ValueError(
                    f"Stage '{stage.name}' ({stage.phase.name.lower()}) cannot follow "
                    f"'{previous.name}' ({previous.phase.name.lower()})."
                )
            previous = stage
        return self

    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]
