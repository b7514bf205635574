"""Bundler configuration and invocation."""

from .profiles import CUSTOM, MINIMAL, PLAYER_ONLY, BuildProfile, build_bundle_config
from .rollup import Bundler, RollupBundler, render_rollup_config

__all__ = [
    "CUSTOM",
    "MINIMAL",
    "PLAYER_ONLY",
    "BuildProfile",
    "build_bundle_config",
    "Bundler",
    "RollupBundler",
    "render_rollup_config",
]
