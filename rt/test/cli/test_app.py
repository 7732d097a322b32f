from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rt import __version__
from rt.cli.app import app
from rt.core.config import CONFIG_ENV, WORK_DIR_ENV
from rt.core.errors import ErrorCode

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_missing_config_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.toml"), "trains"])

    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_invalid_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "release.toml"
    config.write_text("[io\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV, str(config))

    result = runner.invoke(app, ["trains"])

    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_where_uses_configured_work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "release.toml"
    config.write_text(f'[io]\nwork_dir = "{(tmp_path / "work").as_posix()}"\n', encoding="utf-8")
    monkeypatch.delenv(WORK_DIR_ENV, raising=False)
    # --config writes the env var; restore it after the test.
    monkeypatch.setenv(CONFIG_ENV, str(config))

    result = runner.invoke(app, ["--config", str(config), "where"])

    assert result.exit_code == 0
    assert "work directory:" in result.output
    assert "spring-data-commons" in result.output


def test_sub_apps_are_registered() -> None:
    result = runner.invoke(app, ["update", "--help"])

    assert result.exit_code == 0
    for command in ("gradle", "docs", "changelog", "notice"):
        assert command in result.output
