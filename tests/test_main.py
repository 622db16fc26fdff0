"""Unit tests for main.py, the CLI entry point."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from projectdesk import __version__
from projectdesk.main import app

runner = CliRunner()


def _invoke(*args):
    return runner.invoke(app, list(args))


class TestTopLevelHelp:
    def test_help_lists_commands(self):
        result = _invoke("--help")

        assert result.exit_code == 0
        for command in ("auth", "config", "run", "version"):
            assert command in result.output

    @pytest.mark.parametrize("group", ["auth", "config"])
    def test_subcommand_help(self, group):
        result = _invoke(group, "--help")

        assert result.exit_code == 0


class TestLaunch:
    def test_no_command_launches_tui(self):
        with patch("projectdesk.ui.app.run_app") as mock_run:
            result = _invoke()

        assert result.exit_code == 0
        mock_run.assert_called_once_with()

    def test_run_launches_tui(self):
        with patch("projectdesk.ui.app.run_app") as mock_run:
            result = _invoke("run")

        assert result.exit_code == 0
        mock_run.assert_called_once_with()

    def test_subcommand_does_not_launch_tui(self, tmp_config):
        with patch("projectdesk.ui.app.run_app") as mock_run:
            with patch("projectdesk.main.get_config_service", return_value=tmp_config):
                result = _invoke("version")

        assert result.exit_code == 0
        mock_run.assert_not_called()


class TestVersion:
    def test_version_shows_backend(self, tmp_config):
        with patch("projectdesk.main.get_config_service", return_value=tmp_config):
            result = _invoke("version")

        assert __version__ in result.output
        assert "http://localhost:54321" in result.output
        assert "No anon key configured" in result.output


class TestSuggestions:
    def test_typo_suggests_command(self):
        result = _invoke("vresion")

        assert result.exit_code == 1
        assert "Did you mean this?" in result.output
        assert "version" in result.output
