from __future__ import annotations

from pathlib import Path

import pytest

from videojs_build.settings import BuildSettings, load_settings


def test_settings_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = BuildSettings.from_env({})

    assert settings.project_root == tmp_path.resolve()
    assert settings.rollup_command == ("npx", "rollup")
    assert settings.license_template == tmp_path.resolve() / "build" / "license-header.txt"
    assert settings.package_json == tmp_path.resolve() / "package.json"
    assert settings.log_level == "INFO"


def test_settings_from_environment(tmp_path: Path) -> None:
    settings = BuildSettings.from_env(
        {
            "VIDEOJS_BUILD_ROOT": str(tmp_path),
            "VIDEOJS_BUILD_ROLLUP": "node ./node_modules/.bin/rollup --silent",
            "VIDEOJS_BUILD_LICENSE": "/etc/license.txt",
            "VIDEOJS_BUILD_LOG_LEVEL": "debug",
        }
    )

    assert settings.rollup_command == ("node", "./node_modules/.bin/rollup", "--silent")
    assert settings.license_template == Path("/etc/license.txt")
    assert settings.package_json == tmp_path.resolve() / "package.json"
    assert settings.log_level == "DEBUG"


def test_load_settings_reads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("VIDEOJS_BUILD_ROLLUP", "VIDEOJS_BUILD_ROOT"):
        # setenv first so teardown restores the original state after load_dotenv writes.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text("VIDEOJS_BUILD_ROLLUP=yarn rollup\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    settings = load_settings(env_file)
    assert settings.rollup_command == ("yarn", "rollup")
    assert settings.project_root == tmp_path.resolve()
