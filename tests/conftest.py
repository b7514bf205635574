from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import pytest

from videojs_build.bundle.rollup import artifact_path
from videojs_build.errors import BundlerError
from videojs_build.schemas.build import BundleConfig
from videojs_build.settings import BuildSettings

LICENSE_TEMPLATE = """/**
 * @license
 * Video.js <%= version %> <http://videojs.com/>
 * <%= copyright %>
 * Available under Apache License Version 2.0
 * <https://github.com/videojs/video.js/blob/main/LICENSE>
<% if (includesVtt) { %> *
 * Includes vtt.js <https://github.com/mozilla/vtt.js>
 * Available under Apache License Version 2.0
 * <https://github.com/mozilla/vtt.js/blob/main/LICENSE>
<% } %> */
"""


class FakeBundler:
    """Stands in for Rollup: records configs and writes a banner-prefixed artifact."""

    def __init__(self, project_root: Path, *, body_size: int = 2048, error: Optional[str] = None) -> None:
        self.project_root = project_root
        self.body_size = body_size
        self.error = error
        self.configs: List[BundleConfig] = []
        self.entries: List[Optional[str]] = []

    def bundle(self, config: BundleConfig) -> Path:
        self.configs.append(config)
        entry = Path(config.input)
        if not entry.is_absolute():
            entry = self.project_root / entry
        self.entries.append(entry.read_text(encoding="utf-8") if entry.exists() else None)
        if self.error:
            raise BundlerError(self.error)
        artifact = artifact_path(config, self.project_root)
        artifact.parent.mkdir(parents=True, exist_ok=True)
        artifact.write_text(config.output.banner + "x" * self.body_size, encoding="utf-8")
        return artifact


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "video.js"
    (root / "build").mkdir(parents=True)
    (root / "src" / "js").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "video.js",
                "version": "8.10.0",
                "copyright": "Copyright Brightcove, Inc. <https://www.brightcove.com/>",
                "main": "./dist/video.cjs.js",
            }
        ),
        encoding="utf-8",
    )
    (root / "build" / "license-header.txt").write_text(LICENSE_TEMPLATE, encoding="utf-8")
    (root / "src" / "js" / "video.js").write_text("export default function videojs() {}\n", encoding="utf-8")
    return root


@pytest.fixture()
def settings(project_root: Path) -> BuildSettings:
    return BuildSettings(
        project_root=project_root,
        rollup_command=("rollup",),
        license_template=project_root / "build" / "license-header.txt",
        package_json=project_root / "package.json",
    )


@pytest.fixture()
def bundler(project_root: Path) -> FakeBundler:
    return FakeBundler(project_root)


def temp_entries(root: Path) -> List[Path]:
    return sorted(root.glob(".videojs-entry-*.js"))
