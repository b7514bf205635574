"""Error taxonomy shared by the build entry points."""

from __future__ import annotations


class BuildError(RuntimeError):
    """Base class for failures that abort a build."""


class ConfigurationError(BuildError):
    """Raised when templates, metadata or build inputs are missing or malformed."""


class UnknownFeatureError(ConfigurationError):
    """Raised when a feature key is not present in the registry."""

    def __init__(self, keys, available) -> None:
        self.keys = tuple(keys)
        self.available = tuple(available)
        super().__init__(
            f"Unknown feature(s): {', '.join(self.keys)}. Available features: {', '.join(self.available)}."
        )


class BundlerError(BuildError):
    """Raised when the external bundler fails or produces no artifact."""


class FilesystemError(BuildError):
    """Raised when an artifact or ephemeral file cannot be written, read or removed."""
