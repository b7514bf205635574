"""Feature-selectable Video.js build."""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from ..bundle.profiles import CUSTOM
from ..bundle.rollup import Bundler
from ..features import CUSTOM_FEATURES, DEFAULT_FEATURES, FeatureRegistry, parse_feature_list
from ..schemas.build import OUTPUT_FORMATS, BuildOptions
from ..settings import BuildSettings
from ._common import bootstrap, run_build

logger = logging.getLogger(__name__)


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    settings: Optional[BuildSettings] = None,
    bundler: Optional[Bundler] = None,
) -> int:
    parser = _build_parser()
    args, unknown = parser.parse_known_args(argv)
    resolved = bootstrap(settings)
    if unknown:
        logger.warning("Ignoring unrecognised arguments: %s", " ".join(unknown))

    if args.format not in OUTPUT_FORMATS:
        logger.error(
            "Unsupported output format: %s (expected one of: %s)", args.format, ", ".join(OUTPUT_FORMATS)
        )
        return 1

    features = parse_feature_list(args.features)
    if not features:
        logger.info("No features selected; using default configuration.")
        features = list(DEFAULT_FEATURES)

    options = BuildOptions(
        features=frozenset(features),
        output=args.output,
        format=args.format,
        dry_run=args.dry_run,
    )
    return run_build(CUSTOM, options, resolved, bundler=bundler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="videojs-build-custom",
        description="Video.js custom build tool.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_epilog(CUSTOM_FEATURES),
    )
    parser.add_argument("--features", nargs="?", const="", help="Comma-separated features to include.")
    parser.add_argument("--output", nargs="?", help=f"Output file (default: {CUSTOM.default_output}).")
    parser.add_argument(
        "--format",
        nargs="?",
        const="umd",
        default="umd",
        help=f"Output format: {', '.join(OUTPUT_FORMATS)} (default: umd).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resolved entry module and bundler configuration without building.",
    )
    return parser


def _epilog(registry: FeatureRegistry) -> str:
    lines = ["Available features:"]
    for descriptor in registry:
        marker = " (required)" if descriptor.required else ""
        lines.append(f"  {descriptor.key}{marker} - {descriptor.description}")
    lines.extend(
        [
            "",
            "Examples:",
            "  videojs-build-custom --features core,hls --output dist/video-custom.js",
            "  videojs-build-custom --features core --format es --output dist/video-core.es.js",
        ]
    )
    return "\n".join(lines)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
