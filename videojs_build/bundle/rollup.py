"""Rollup invocation: config rendering and the subprocess bundler."""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Protocol, Sequence

from ..entry import scoped_file
from ..errors import BundlerError
from ..schemas.build import BundleConfig, StageDescriptor

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9_$]")


class Bundler(Protocol):
    def bundle(self, config: BundleConfig) -> Path:  # pragma: no cover - interface
        ...


def _identifier(name: str) -> str:
    ident = _IDENTIFIER_RE.sub("_", name)
    return ident if not ident[:1].isdigit() else f"_{ident}"


def _render_stage(stage: StageDescriptor, identifiers: Dict[str, str]) -> str:
    if stage.plugin is None:
        source = json.dumps(stage.options["source"])
        return (
            f"{{ name: {json.dumps(stage.name)}, "
            f"resolveId(source) {{ return source === {source} ? false : null; }} }}"
        )
    arguments = "" if stage.options is None else json.dumps(stage.options)
    return f"{identifiers[stage.plugin]}({arguments})"


def render_rollup_config(config: BundleConfig) -> str:
    """Render ``config`` as an ES module Rollup can load with ``--config``."""

    identifiers: Dict[str, str] = {}
    imports: List[str] = []
    for stage in config.stages:
        if stage.plugin is None or stage.plugin in identifiers:
            continue
        identifiers[stage.plugin] = _identifier(stage.name)
        imports.append(f"import {identifiers[stage.plugin]} from {json.dumps(stage.plugin)};")

    plugins = ",\n".join(f"    {_render_stage(stage, identifiers)}" for stage in config.stages)
    output = json.dumps(config.output.model_dump(mode="json"), indent=2).replace("\n", "\n  ")
    lines = [
        "// Generated by videojs-build; removed once the bundle is written.",
        *imports,
        "",
        "export default {",
        f"  input: {json.dumps(config.input)},",
        f"  external: {json.dumps(list(config.external))},",
        f"  output: {output},",
        "  plugins: [",
        plugins,
        "  ]",
        "};",
        "",
    ]
    return "\n".join(lines)


def artifact_path(config: BundleConfig, project_root: Path) -> Path:
    path = Path(config.output.file)
    return path if path.is_absolute() else project_root / path


class RollupBundler:
    """Runs the Rollup CLI against a rendered, scoped config file."""

    def __init__(self, command: Sequence[str], *, project_root: Path) -> None:
        if not command:
            raise BundlerError("Bundler command must not be empty.")
        self.command = list(command)
        self.project_root = project_root

    def bundle(self, config: BundleConfig) -> Path:
        executable = shutil.which(self.command[0])
        if executable is None:
            raise BundlerError(f"Bundler executable '{self.command[0]}' not found on PATH.")

        artifact = artifact_path(config, self.project_root)
        artifact.unlink(missing_ok=True)

        with scoped_file(
            self.project_root,
            render_rollup_config(config),
            prefix=".videojs-rollup-",
            suffix=".mjs",
        ) as config_path:
            cmd = [executable, *self.command[1:], "--config", str(config_path)]
            logger.debug("Running bundler: %s", " ".join(cmd))
            proc = subprocess.run(
                cmd,
                cwd=self.project_root,
                capture_output=True,
                text=True,
                check=False,
            )

        if proc.stdout:
            logger.debug(proc.stdout.strip())
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise BundlerError(f"Bundler exited with status {proc.returncode}: {detail}")

        if not artifact.exists():
            raise BundlerError(f"Bundler reported success but {artifact} was not written.")
        return artifact
