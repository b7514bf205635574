"""Schema definitions for build inputs and bundler configuration."""

from .build import (
    BuildOptions,
    BundleConfig,
    OutputDescriptor,
    OutputFormat,
    PackageMetadata,
    StageDescriptor,
    StagePhase,
)

__all__ = [
    "BuildOptions",
    "BundleConfig",
    "OutputDescriptor",
    "OutputFormat",
    "PackageMetadata",
    "StageDescriptor",
    "StagePhase",
]
