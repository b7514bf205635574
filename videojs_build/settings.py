"""Environment-driven settings for the build entry points."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

DEFAULT_ROLLUP_COMMAND = "npx rollup"
DEFAULT_LICENSE_TEMPLATE = "build/license-header.txt"
DEFAULT_PACKAGE_JSON = "package.json"


@dataclass(frozen=True)
class BuildSettings:
    project_root: Path
    rollup_command: Tuple[str, ...]
    license_template: Path
    package_json: Path
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BuildSettings":
        env = os.environ if environ is None else environ
        root = Path(env.get("VIDEOJS_BUILD_ROOT") or Path.cwd()).resolve()
        return cls(
            project_root=root,
            rollup_command=tuple(shlex.split(env.get("VIDEOJS_BUILD_ROLLUP") or DEFAULT_ROLLUP_COMMAND)),
            license_template=_under(root, env.get("VIDEOJS_BUILD_LICENSE") or DEFAULT_LICENSE_TEMPLATE),
            package_json=_under(root, env.get("VIDEOJS_BUILD_PACKAGE_JSON") or DEFAULT_PACKAGE_JSON),
            log_level=(env.get("VIDEOJS_BUILD_LOG_LEVEL") or "INFO").upper(),
        )


def load_settings(env_file: Optional[Path] = None) -> BuildSettings:
    """Load ``.env`` (without overriding the process environment) and resolve settings."""

    dotenv_path = env_file or Path.cwd() / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)
    return BuildSettings.from_env()


def _under(root: Path, value: str) -> Path:
    path = Path(value)
    return path if path.is_absolute() else root / path
