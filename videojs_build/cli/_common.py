"""Shared plumbing for the build entry points."""

from __future__ import annotations

import json
import logging
import sys
from typing import Mapping, Optional

from ..bundle.profiles import BuildProfile
from ..bundle.rollup import Bundler
from ..executor import BuildExecutor
from ..schemas.build import BuildOptions
from ..settings import BuildSettings, load_settings

logger = logging.getLogger("videojs_build")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
    )


def bootstrap(settings: Optional[BuildSettings] = None) -> BuildSettings:
    """Resolve settings and configure logging before any output is produced."""

    resolved = settings or load_settings()
    configure_logging(resolved.log_level)
    return resolved


def run_build(
    profile: BuildProfile,
    options: BuildOptions,
    settings: BuildSettings,
    *,
    bundler: Optional[Bundler] = None,
) -> int:
    """Run one build and translate any failure into exit status 1."""

    try:
        executor = BuildExecutor(profile, settings, bundler=bundler)
        if options.dry_run:
            _print_json(executor.plan(options))
            return 0
        executor.run(options)
    except Exception as exc:
        logger.error("Build failed: %s", exc)
        logger.debug("Build failure details", exc_info=True)
        return 1
    return 0


def _print_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, default=str))
