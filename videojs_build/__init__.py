"""Build tooling for custom, minimal and player-only Video.js distributions."""

__version__ = "0.1.0"
from .banner import BannerSource, render_template
from .bundle import CUSTOM, MINIMAL, PLAYER_ONLY, BuildProfile, RollupBundler, build_bundle_config
from .entry import render_entry, scoped_entry_module
from .errors import BuildError, BundlerError, ConfigurationError, FilesystemError, UnknownFeatureError
from .executor import BuildExecutor, BuildResult, BuildState
from .features import CUSTOM_FEATURES, DEFAULT_FEATURES, FeatureDescriptor, FeatureRegistry, normalize_features
from .schemas.build import BuildOptions, BundleConfig
from .settings import BuildSettings, load_settings

__all__ = [
    "__version__",
    "BannerSource",
    "render_template",
    "CUSTOM",
    "MINIMAL",
    "PLAYER_ONLY",
    "BuildProfile",
    "RollupBundler",
    "build_bundle_config",
    "render_entry",
    "scoped_entry_module",
    "BuildError",
    "BundlerError",
    "ConfigurationError",
    "FilesystemError",
    "UnknownFeatureError",
    "BuildExecutor",
    "BuildResult",
    "BuildState",
    "CUSTOM_FEATURES",
    "DEFAULT_FEATURES",
    "FeatureDescriptor",
    "FeatureRegistry",
    "normalize_features",
    "BuildOptions",
    "BundleConfig",
    "BuildSettings",
    "load_settings",
]
