"""Factories for the Rollup transform stages shared by every build profile."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from ..schemas.build import StageDescriptor, StagePhase

HOST_GLOBALS = {
    "global": "window",
    "global/window": "window",
    "global/document": "document",
}

LEGACY_TARGETS: tuple[str, ...] = (
    "last 3 major versions",
    "Firefox ESR",
    "Chrome >= 53",
    "not dead",
    "not ie 11",
    "not baidu 7",
    "not and_qq 11",
    "not and_uc 12",
    "not op_mini all",
)

MODERN_TARGETS: tuple[str, ...] = (
    "last 2 versions",
    "Chrome >= 60",
    "Firefox >= 60",
    "Safari >= 12",
    "Edge >= 79",
)


def ignore_stage(modules: Iterable[str]) -> StageDescriptor:
    """Replace ``modules`` with empty stubs via rollup-plugin-ignore."""

    return StageDescriptor(
        name="ignore",
        phase=StagePhase.REWRITE,
        plugin="rollup-plugin-ignore",
        options=list(modules),
    )


def exclude_stage(name: str, specifier: str) -> StageDescriptor:
    """Inline resolveId hook that refuses to resolve ``specifier``."""

    return StageDescriptor(
        name=name,
        phase=StagePhase.REWRITE,
        options={"source": specifier},
    )


def alias_stage(project_root: Path) -> StageDescriptor:
    return StageDescriptor(
        name="alias",
        phase=StagePhase.REWRITE,
        plugin="rollup-plugin-alias",
        options={"video.js": str((project_root / "src" / "js" / "video.js").resolve())},
    )


def resolve_stage() -> StageDescriptor:
    return StageDescriptor(
        name="resolve",
        phase=StagePhase.RESOLVE,
        plugin="rollup-plugin-node-resolve",
        options={"mainFields": ["jsnext:main", "module", "main"], "browser": True},
    )


def json_stage() -> StageDescriptor:
    return StageDescriptor(name="json", phase=StagePhase.INTEROP, plugin="rollup-plugin-json", options=None)


def external_globals_stage() -> StageDescriptor:
    return StageDescriptor(
        name="externalGlobals",
        phase=StagePhase.INTEROP,
        plugin="rollup-plugin-external-globals",
        options=dict(HOST_GLOBALS),
    )


def commonjs_stage() -> StageDescriptor:
    return StageDescriptor(
        name="commonjs",
        phase=StagePhase.INTEROP,
        plugin="rollup-plugin-commonjs",
        options={"sourceMap": False},
    )


def babel_stage(targets: Sequence[str], *, exclude: str, compact: bool) -> StageDescriptor:
    """Syntax downleveling for the given browserslist ``targets``."""

    return StageDescriptor(
        name="babel",
        phase=StagePhase.DOWNLEVEL,
        plugin="rollup-plugin-babel",
        options={
            "runtimeHelpers": True,
            "babelrc": False,
            "exclude": exclude,
            "compact": compact,
            "presets": [
                [
                    "@babel/preset-env",
                    {
                        "targets": list(targets),
                        "bugfixes": True,
                        "loose": True,
                        "modules": False,
                    },
                ]
            ],
            "plugins": [["@babel/plugin-transform-runtime", {"regenerator": False}]],
        },
    )


def svg_stage() -> StageDescriptor:
    return StageDescriptor(name="svg", phase=StagePhase.EMBED, plugin="rollup-plugin-svg", options=None)


def standard_pipeline(
    project_root: Path,
    *,
    rewrites: Sequence[StageDescriptor],
    targets: Sequence[str],
    transpile_exclude: str,
    compact: bool,
) -> List[StageDescriptor]:
    """Assemble stages in bundler order: rewrites, resolution, interop, downlevel, embedding."""

    return [
        *rewrites,
        alias_stage(project_root),
        resolve_stage(),
        json_stage(),
        external_globals_stage(),
        commonjs_stage(),
        babel_stage(targets, exclude=transpile_exclude, compact=compact),
        svg_stage(),
    ]
