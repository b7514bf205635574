"""Build profiles and the bundle configuration builder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from pydantic import ValidationError

from ..errors import ConfigurationError
from ..features import CUSTOM_FEATURES
from ..schemas.build import BuildOptions, BundleConfig, OutputDescriptor, StageDescriptor
from .stages import LEGACY_TARGETS, MODERN_TARGETS, exclude_stage, ignore_stage, standard_pipeline

SUBTITLE_MODULE = "videojs-vtt.js"
HLS_MODULE = "@videojs/http-streaming"
QUALITY_LEVELS_MODULE = "videojs-contrib-quality-levels"
FULL_BUILD = "dist/video.js"
CORE_BUILD = "dist/alt/video.core.js"


@dataclass(frozen=True)
class BuildProfile:
    """Fixed description of one build mode."""

    name: str
    default_output: str
    targets: Tuple[str, ...]
    minify: bool
    transpile_exclude: str = "node_modules/**"
    synthesize_entry: bool = False
    exclusions: Tuple[Tuple[str, str], ...] = ()
    companions: Tuple[Tuple[str, str], ...] = ()
    summary: Tuple[str, ...] = ()

    def includes_vtt(self, options: BuildOptions) -> bool:
        """Whether the subtitle module ends up in the bundle."""

        if not self.synthesize_entry:
            return False
        return "vtt" in options.features

    def rewrite_stages(self, options: BuildOptions) -> list[StageDescriptor]:
        if self.synthesize_entry:
            return [] if self.includes_vtt(options) else [ignore_stage([SUBTITLE_MODULE])]
        return [exclude_stage(name, specifier) for name, specifier in self.exclusions]


CUSTOM = BuildProfile(
    name="custom",
    default_output="dist/video-custom.js",
    targets=LEGACY_TARGETS,
    minify=False,
    transpile_exclude="node_modules/**(!http-streaming)",
    synthesize_entry=True,
    companions=(("full", FULL_BUILD),),
)

MINIMAL = BuildProfile(
    name="minimal",
    default_output="dist/video-minimal.js",
    targets=MODERN_TARGETS,
    minify=True,
    exclusions=(("ignore-vtt", SUBTITLE_MODULE),),
    companions=(("full", FULL_BUILD),),
)

PLAYER_ONLY = BuildProfile(
    name="player-only",
    default_output="dist/video-player-only.js",
    targets=MODERN_TARGETS,
    minify=True,
    exclusions=(
        ("ignore-vtt", SUBTITLE_MODULE),
        ("ignore-hls", HLS_MODULE),
        ("ignore-quality-levels", QUALITY_LEVELS_MODULE),
    ),
    companions=(("full", FULL_BUILD), ("core", CORE_BUILD)),
    summary=(
        "Basic video playback",
        "Playback control bar",
        "Volume control",
        "Fullscreen support",
        "Default English language",
        "No subtitle support",
        "No HLS support",
        "No quality level selection",
    ),
)

def core_input() -> str:
    """Project-relative path of the core player module."""

    ref = CUSTOM_FEATURES.core().source_refs[0]
    return ref[2:] if ref.startswith("./") else ref


def build_bundle_config(
    profile: BuildProfile,
    options: BuildOptions,
    *,
    project_root: Path,
    banner: str,
    input_path: Optional[str] = None,
) -> BundleConfig:
    """Assemble the immutable bundler configuration for one build."""

    stages = standard_pipeline(
        project_root,
        rewrites=profile.rewrite_stages(options),
        targets=profile.targets,
        transpile_exclude=profile.transpile_exclude,
        compact=profile.minify,
    )
    try:
        return BundleConfig(
            input=input_path or core_input(),
            output=OutputDescriptor(
                format=options.format,
                file=options.output or profile.default_output,
                banner=banner,
            ),
            external=[],
            stages=tuple(stages),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid bundle configuration for '{profile.name}' build: {exc}") from exc
