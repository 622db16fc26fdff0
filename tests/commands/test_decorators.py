"""Unit tests for command decorators."""

from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from projectdesk.commands.decorators import AppError, _require_auth, command_wrapper
from projectdesk.errors import NotFoundError
from projectdesk.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_NOT_FOUND

runner = CliRunner()


class TestRequireAuth:
    def test_stored_session_passes(self):
        config_svc = MagicMock()
        config_svc.load_session.return_value = {"access_token": "token"}

        with patch("projectdesk.commands.decorators.get_config_service", return_value=config_svc):
            _require_auth()

    def test_missing_session_exits_with_auth_failure(self):
        config_svc = MagicMock()
        config_svc.load_session.return_value = None

        with patch("projectdesk.commands.decorators.get_config_service", return_value=config_svc):
            with patch("projectdesk.commands.decorators.format_error") as mock_error:
                with pytest.raises(typer.Exit) as exc_info:
                    _require_auth()

        assert exc_info.value.exit_code == ERROR_AUTH_FAILURE
        mock_error.assert_called_once()


class TestAppError:
    def test_default_exit_code(self):
        assert AppError("boom").exit_code == 1

    def test_custom_exit_code(self):
        assert AppError("boom", exit_code=7).exit_code == 7


def _app_with(func) -> typer.Typer:
    app = typer.Typer()
    app.command()(func)

    @app.command()
    def noop() -> None:
        """Second command so the app stays a group."""

    return app


class TestCommandWrapper:
    def test_sync_command_runs(self):
        @command_wrapper
        def hello() -> None:
            print("hi")

        result = runner.invoke(_app_with(hello), ["hello"])

        assert result.exit_code == 0
        assert "hi" in result.output

    def test_async_command_runs(self):
        @command_wrapper
        async def hello() -> None:
            print("async hi")

        result = runner.invoke(_app_with(hello), ["hello"])

        assert result.exit_code == 0
        assert "async hi" in result.output

    def test_app_error_uses_its_exit_code(self):
        @command_wrapper
        def fail() -> None:
            raise AppError("custom failure", exit_code=9)

        result = runner.invoke(_app_with(fail), ["fail"])

        assert result.exit_code == 9
        assert "custom failure" in result.output

    def test_domain_error_maps_to_exit_code(self):
        @command_wrapper
        async def fail() -> None:
            raise NotFoundError("No tasks row with id x", status_code=404)

        result = runner.invoke(_app_with(fail), ["fail"])

        assert result.exit_code == ERROR_NOT_FOUND
        assert "No tasks row" in result.output

    def test_unexpected_error_exits_one(self):
        @command_wrapper
        def crash() -> None:
            raise ZeroDivisionError("oops")

        result = runner.invoke(_app_with(crash), ["crash"])

        assert result.exit_code == 1
        assert "An unexpected error occurred" in result.output

    def test_auth_required_checks_session(self):
        @command_wrapper(auth_required=True)
        def secret() -> None:
            print("should not run")

        with patch(
            "projectdesk.commands.decorators._require_auth",
            side_effect=typer.Exit(ERROR_AUTH_FAILURE),
        ):
            result = runner.invoke(_app_with(secret), ["secret"])

        assert result.exit_code == ERROR_AUTH_FAILURE
        assert "should not run" not in result.output
