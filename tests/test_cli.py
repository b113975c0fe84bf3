from __future__ import annotations

import json
from pathlib import Path
from typing import Generator, List
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from updateresolver.cli import cli, main
from updateresolver.constants import (
    EXIT_ERROR,
    EXIT_NO_UPDATE,
    EXIT_UPDATE_AVAILABLE,
    EXIT_USAGE,
)
from updateresolver.utils.logger import disable_logging


@pytest.fixture(autouse=True)
def isolated_cli(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run each CLI test from an empty directory with colors off."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("UPDATERESOLVER_CONFIG", raising=False)
    yield
    disable_logging()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "releases.json"
    path.write_text(
        json.dumps(
            {
                "releases": [
                    {"version": "1.1.0", "url": "https://example.org/1.1.0"},
                    {"version": "2.0.0-beta.1"},
                    {"version": "1.0.0"},
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def _invoke(runner: CliRunner, args: List[str]):
    return runner.invoke(cli, args, catch_exceptions=False)


@pytest.mark.integration
class TestResolveCommand:
    """End-to-end tests for ``updateresolver resolve``."""

    def test_update_available(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(runner, ["resolve", str(manifest), "--current", "1.0.0"])

        assert result.exit_code == EXIT_UPDATE_AVAILABLE
        assert "Update available" in result.output
        assert "2.0.0-beta.1" in result.output

    def test_stable_only_skips_prerelease(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(
            runner,
            ["resolve", str(manifest), "--current", "1.0.0", "--stable-only", "-f", "json"],
        )

        assert result.exit_code == EXIT_UPDATE_AVAILABLE
        payload = json.loads(result.stdout)
        assert payload == {
            "current_version": "1.0.0",
            "update_available": True,
            "update_type": "minor",
            "update": {"version": "1.1.0", "download_url": "https://example.org/1.1.0"},
        }

    def test_up_to_date(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(runner, ["resolve", str(manifest), "--current", "2.0.0"])

        assert result.exit_code == EXIT_NO_UPDATE
        assert "[OK] 2.0.0 is up to date" in result.output

    def test_up_to_date_json(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(
            runner, ["resolve", str(manifest), "--current", "2.0.0", "--format", "json"]
        )

        assert result.exit_code == EXIT_NO_UPDATE
        payload = json.loads(result.stdout)
        assert payload["update_available"] is False
        assert payload["update"] is None

    def test_config_file_applies(self, runner: CliRunner, manifest: Path, tmp_path: Path) -> None:
        (tmp_path / "updateresolver.toml").write_text(
            "[updateresolver]\nstable_only = true\n", encoding="utf-8"
        )

        result = _invoke(runner, ["resolve", str(manifest), "--current", "1.1.0"])

        assert result.exit_code == EXIT_NO_UPDATE

    def test_flag_overrides_config(
        self, runner: CliRunner, manifest: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "updateresolver.toml").write_text(
            "[updateresolver]\nstable_only = true\n", encoding="utf-8"
        )

        result = _invoke(
            runner,
            ["resolve", str(manifest), "--current", "1.1.0", "--include-prereleases"],
        )

        assert result.exit_code == EXIT_UPDATE_AVAILABLE

    def test_invalid_config_exits_with_error(
        self, runner: CliRunner, manifest: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "updateresolver.toml").write_text(
            "[updateresolver]\ncomparator = 'calver'\n", encoding="utf-8"
        )

        result = _invoke(runner, ["resolve", str(manifest), "--current", "1.0.0"])

        assert result.exit_code == EXIT_ERROR
        assert "comparator must be" in result.output

    def test_broken_manifest_exits_with_error(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        result = _invoke(runner, ["resolve", str(path), "--current", "1.0.0"])

        assert result.exit_code == EXIT_ERROR
        assert "Invalid JSON" in result.output

    def test_unparseable_current_version(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(runner, ["resolve", str(manifest), "--current", "banana"])

        assert result.exit_code == EXIT_ERROR

    @pytest.mark.parametrize(
        "extra",
        [[], ["--current", "1.0.0", "--distribution", "pytest"]],
        ids=["neither", "both"],
    )
    def test_requires_exactly_one_version_source(
        self, runner: CliRunner, manifest: Path, extra: List[str]
    ) -> None:
        result = _invoke(runner, ["resolve", str(manifest), *extra])

        assert result.exit_code == EXIT_USAGE

    def test_installed_distribution(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "releases.json"
        path.write_text(json.dumps([{"version": "999.0.0"}]), encoding="utf-8")

        result = _invoke(runner, ["resolve", str(path), "--distribution", "pytest"])

        assert result.exit_code == EXIT_UPDATE_AVAILABLE

    def test_missing_distribution(self, runner: CliRunner, manifest: Path) -> None:
        result = _invoke(
            runner,
            ["resolve", str(manifest), "--distribution", "surely-not-installed-dist"],
        )

        assert result.exit_code == EXIT_ERROR
        assert "not installed" in result.output


@pytest.mark.unit
class TestCliGroup:
    """Tests for the top-level group and main()."""

    def test_version(self, runner: CliRunner) -> None:
        result = _invoke(runner, ["--version"])

        assert result.exit_code == 0
        assert result.output.startswith("updateresolver ")

    def test_no_color_sets_env(self, runner: CliRunner, manifest: Path) -> None:
        with patch.dict("os.environ", {}, clear=False):
            result = _invoke(
                runner, ["--no-color", "resolve", str(manifest), "--current", "2.0.0"]
            )

        assert result.exit_code == EXIT_NO_UPDATE

    def test_main_returns_update_exit_code(self, manifest: Path) -> None:
        argv = ["updateresolver", "resolve", str(manifest), "--current", "1.0.0"]

        with patch("sys.argv", argv):
            assert main() == EXIT_UPDATE_AVAILABLE

    def test_main_usage_error(self) -> None:
        with patch("sys.argv", ["updateresolver", "resolve"]):
            assert main() == EXIT_USAGE
