"""Build orchestration: options -> entry -> config -> bundler -> report."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .banner import BannerSource
from .bundle.profiles import BuildProfile, build_bundle_config
from .bundle.rollup import Bundler, RollupBundler
from .bundle.utils import SizeComparison, file_size, format_kb, format_mb
from .entry import render_entry, scoped_entry_module
from .errors import FilesystemError
from .features import CUSTOM_FEATURES, FeatureRegistry, normalize_features
from .schemas.build import BuildOptions, BundleConfig
from .settings import BuildSettings

logger = logging.getLogger(__name__)

DRY_RUN_ENTRY = "<generated-entry>.js"


class BuildState(str, Enum):
    IDLE = "idle"
    PARSING_ARGS = "parsing-args"
    SYNTHESIZING_ENTRY = "synthesizing-entry"
    CONFIGURING = "configuring"
    BUNDLING = "bundling"
    REPORTING = "reporting"
    CLEANING_UP = "cleaning-up"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BuildResult:
    profile: str
    artifact: Path
    size: int
    features: Tuple[str, ...] = ()
    comparisons: List[SizeComparison] = field(default_factory=list)


class BuildExecutor:
    """Runs one build for a profile; an executor is single-use."""

    def __init__(
        self,
        profile: BuildProfile,
        settings: BuildSettings,
        *,
        bundler: Optional[Bundler] = None,
        registry: FeatureRegistry = CUSTOM_FEATURES,
    ) -> None:
        self.profile = profile
        self.settings = settings
        self.registry = registry
        self.bundler = bundler or RollupBundler(settings.rollup_command, project_root=settings.project_root)
        self.state = BuildState.IDLE
        self.history: List[BuildState] = [BuildState.IDLE]

    def run(self, options: BuildOptions) -> BuildResult:
        if self.state is not BuildState.IDLE:
            raise RuntimeError(f"Executor already used (state: {self.state.value}).")
        try:
            return self._run(options)
        except OSError as exc:
            self._enter(BuildState.FAILED)
            raise FilesystemError(str(exc)) from exc
        except Exception:
            self._enter(BuildState.FAILED)
            raise

    def plan(self, options: BuildOptions) -> Dict[str, object]:
        """Resolve the entry and configuration without invoking the bundler."""

        options = self._normalize(options)
        entry = render_entry(options.features, self.registry) if self.profile.synthesize_entry else None
        config = self._configure(options, DRY_RUN_ENTRY if entry is not None else None)
        return {
            "profile": self.profile.name,
            "features": list(self._ordered_features(options)),
            "entry": entry,
            "config": config.model_dump(mode="json"),
        }

    def _run(self, options: BuildOptions) -> BuildResult:
        self._enter(BuildState.PARSING_ARGS)
        logger.info("Starting %s build...", self.profile.name)
        options = self._normalize(options)
        features = self._ordered_features(options)
        if features:
            logger.info("Features: %s", ", ".join(features))

        with contextlib.ExitStack() as stack:
            entry_path: Optional[str] = None
            if self.profile.synthesize_entry:
                self._enter(BuildState.SYNTHESIZING_ENTRY)
                entry = render_entry(options.features, self.registry)
                entry_path = str(stack.enter_context(scoped_entry_module(self.settings.project_root, entry)))

            self._enter(BuildState.CONFIGURING)
            config = self._configure(options, entry_path)

            self._enter(BuildState.BUNDLING)
            artifact = self.bundler.bundle(config)

            self._enter(BuildState.REPORTING)
            result = self._report(artifact, features)
            self._enter(BuildState.CLEANING_UP)

        self._enter(BuildState.DONE)
        return result

    def _normalize(self, options: BuildOptions) -> BuildOptions:
        if not self.profile.synthesize_entry:
            return options
        return options.model_copy(update={"features": normalize_features(options.features, self.registry)})

    def _ordered_features(self, options: BuildOptions) -> Tuple[str, ...]:
        return tuple(descriptor.key for descriptor in self.registry.ordered(options.features))

    def _configure(self, options: BuildOptions, entry_path: Optional[str]) -> BundleConfig:
        banner = BannerSource.load(self.settings.license_template, self.settings.package_json)
        return build_bundle_config(
            self.profile,
            options,
            project_root=self.settings.project_root,
            banner=banner.render(includes_vtt=self.profile.includes_vtt(options)),
            input_path=entry_path,
        )

    def _report(self, artifact: Path, features: Tuple[str, ...]) -> BuildResult:
        size = file_size(artifact)
        logger.info("Build complete: %s", artifact)
        logger.info("File size: %s KB (%s MB)", format_kb(size), format_mb(size))

        comparisons: List[SizeComparison] = []
        for label, companion in self.profile.companions:
            companion_path = self.settings.project_root / companion
            if not companion_path.exists():
                continue
            comparison = SizeComparison(
                label=label,
                path=companion_path,
                size=size,
                reference_size=file_size(companion_path),
            )
            comparisons.append(comparison)
            logger.info(comparison.describe())

        if self.profile.summary:
            logger.info("Included functionality:")
            for line in self.profile.summary:
                logger.info("  - %s", line)

        return BuildResult(
            profile=self.profile.name,
            artifact=artifact,
            size=size,
            features=features,
            comparisons=comparisons,
        )

    def _enter(self, state: BuildState) -> None:
        logger.debug("Build state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)
