"""Minimal (core-only, minified) Video.js build."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from ..bundle.profiles import MINIMAL
from ..bundle.rollup import Bundler
from ..schemas.build import BuildOptions
from ..settings import BuildSettings
from ._common import bootstrap, run_build

logger = logging.getLogger(__name__)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    settings: Optional[BuildSettings] = None,
    bundler: Optional[Bundler] = None,
) -> int:
    parser = argparse.ArgumentParser(
        prog="videojs-build-minimal",
        description="Minimal (core-only, minified) Video.js build.",
        epilog=f"Writes {MINIMAL.default_output} in UMD format.",
    )
    _, unknown = parser.parse_known_args(argv)
    resolved = bootstrap(settings)
    if unknown:
        logger.warning("Ignoring unrecognised arguments: %s", " ".join(unknown))
    return run_build(MINIMAL, BuildOptions(format="umd"), resolved, bundler=bundler)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
