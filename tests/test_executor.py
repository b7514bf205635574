from __future__ import annotations

import logging
from pathlib import Path

import pytest

from videojs_build.bundle.profiles import CUSTOM, MINIMAL, PLAYER_ONLY
from videojs_build.errors import BundlerError, ConfigurationError, UnknownFeatureError
from videojs_build.executor import BuildExecutor, BuildState
from videojs_build.schemas.build import BuildOptions
from videojs_build.settings import BuildSettings

from .conftest import FakeBundler, temp_entries


def test_custom_build_writes_artifact_and_cleans_entry(
    settings: BuildSettings, bundler: FakeBundler, project_root: Path
) -> None:
    executor = BuildExecutor(CUSTOM, settings, bundler=bundler)
    result = executor.run(BuildOptions(features=frozenset({"hls"}), output="out.js", format="es"))

    assert result.artifact == project_root / "out.js"
    assert result.features == ("core", "hls")
    assert result.size == result.artifact.stat().st_size
    assert bundler.entries[0] == (
        "import videojs from './src/js/video.js';\n"
        "export default videojs;\n"
        "import '@videojs/http-streaming';\n"
    )
    assert bundler.configs[0].output.format == "es"
    assert "Includes vtt.js" not in bundler.configs[0].output.banner
    assert temp_entries(project_root) == []
    assert executor.history == [
        BuildState.IDLE,
        BuildState.PARSING_ARGS,
        BuildState.SYNTHESIZING_ENTRY,
        BuildState.CONFIGURING,
        BuildState.BUNDLING,
        BuildState.REPORTING,
        BuildState.CLEANING_UP,
        BuildState.DONE,
    ]


def test_custom_build_with_vtt_marks_banner(settings: BuildSettings, bundler: FakeBundler) -> None:
    BuildExecutor(CUSTOM, settings, bundler=bundler).run(BuildOptions(features=frozenset({"core", "vtt"})))
    assert "Includes vtt.js" in bundler.configs[0].output.banner
    assert "ignore" not in bundler.configs[0].stage_names()


def test_failed_build_cleans_entry(settings: BuildSettings, project_root: Path) -> None:
    bundler = FakeBundler(project_root, error="rollup crashed")
    executor = BuildExecutor(CUSTOM, settings, bundler=bundler)

    with pytest.raises(BundlerError):
        executor.run(BuildOptions(features=frozenset({"core"})))

    assert bundler.entries[0] is not None
    assert temp_entries(project_root) == []
    assert executor.state is BuildState.FAILED


def test_unknown_feature_fails_before_bundling(settings: BuildSettings, bundler: FakeBundler) -> None:
    executor = BuildExecutor(CUSTOM, settings, bundler=bundler)
    with pytest.raises(UnknownFeatureError):
        executor.run(BuildOptions(features=frozenset({"core", "dash"})))
    assert bundler.configs == []
    assert executor.history[-2:] == [BuildState.PARSING_ARGS, BuildState.FAILED]


def test_missing_template_fails(settings: BuildSettings, bundler: FakeBundler, project_root: Path) -> None:
    (project_root / "build" / "license-header.txt").unlink()
    with pytest.raises(ConfigurationError):
        BuildExecutor(MINIMAL, settings, bundler=bundler).run(BuildOptions())
    assert bundler.configs == []


def test_minimal_build_uses_core_input(settings: BuildSettings, bundler: FakeBundler, project_root: Path) -> None:
    result = BuildExecutor(MINIMAL, settings, bundler=bundler).run(BuildOptions())

    assert bundler.configs[0].input == "src/js/video.js"
    assert result.artifact == project_root / "dist" / "video-minimal.js"
    assert result.features == ()
    assert result.comparisons == []


def test_player_only_reports_companion_reductions(
    settings: BuildSettings,
    project_root: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.INFO, logger="videojs_build")
    bundler = FakeBundler(project_root, body_size=1000)
    full = project_root / "dist" / "video.js"
    core = project_root / "dist" / "alt" / "video.core.js"
    core.parent.mkdir(parents=True)
    full.write_text("x" * 40000, encoding="utf-8")
    core.write_text("x" * 20000, encoding="utf-8")

    result = BuildExecutor(PLAYER_ONLY, settings, bundler=bundler).run(BuildOptions())

    assert [item.label for item in result.comparisons] == ["full", "core"]
    full_cmp, core_cmp = result.comparisons
    assert full_cmp.reduction == pytest.approx((1 - result.size / 40000) * 100)
    assert core_cmp.reduction == pytest.approx((1 - result.size / 20000) * 100)
    assert f"Reduction vs full build: {full_cmp.reduction:.1f}%" in caplog.text
    assert "No HLS support" in caplog.text
    assert core_cmp.reference_size == 20000


def test_executor_is_single_use(settings: BuildSettings, bundler: FakeBundler) -> None:
    executor = BuildExecutor(MINIMAL, settings, bundler=bundler)
    executor.run(BuildOptions())
    with pytest.raises(RuntimeError):
        executor.run(BuildOptions())


def test_plan_does_not_bundle(settings: BuildSettings, bundler: FakeBundler, project_root: Path) -> None:
    plan = BuildExecutor(CUSTOM, settings, bundler=bundler).plan(BuildOptions(features=frozenset({"vtt"})))

    assert plan["features"] == ["core", "vtt"]
    assert plan["entry"].endswith("import 'videojs-vtt.js';\n")
    assert plan["config"]["output"]["file"] == "dist/video-custom.js"
    assert bundler.configs == []
    assert temp_entries(project_root) == []
