"""Tests for the command-line entry point."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from deconz_exporter.ui.cli import app

runner = CliRunner()

GATEWAY_ENV = (
    "DECONZ_TOKEN",
    "DECONZ_HOST",
    "DECONZ_PORT",
    "DECONZ_VERBOSE",
    "DECONZ_LISTEN_PORT",
    "DECONZ_LOG_LEVEL",
    "DECONZ_LOG_DIR",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Isolate from DECONZ_* variables and .env files in the working directory."""
    for name in GATEWAY_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def uvicorn_run() -> Iterator[MagicMock]:
    """Stub out the server so the command returns."""
    with (
        patch("deconz_exporter.ui.cli.uvicorn.run") as run,
        patch("deconz_exporter.ui.cli.configure_logging"),
    ):
        yield run


class TestRequiredFlags:
    """Test startup validation."""

    def test_missing_token(self, uvicorn_run: MagicMock) -> None:
        """Test token is checked first."""
        result = runner.invoke(app, ["--port", "80"])

        assert result.exit_code == 1
        assert "token is required" in result.output
        uvicorn_run.assert_not_called()

    def test_empty_host(self, uvicorn_run: MagicMock) -> None:
        """Test an explicitly empty host is rejected."""
        result = runner.invoke(app, ["--token", "T0KEN", "--host", "", "--port", "80"])

        assert result.exit_code == 1
        assert "host is required" in result.output
        uvicorn_run.assert_not_called()

    def test_missing_port(self, uvicorn_run: MagicMock) -> None:
        """Test port zero counts as unset."""
        result = runner.invoke(app, ["--token", "T0KEN"])

        assert result.exit_code == 1
        assert "port is required" in result.output
        uvicorn_run.assert_not_called()

    def test_invalid_port(self, uvicorn_run: MagicMock) -> None:
        """Test an out-of-range port is a configuration error."""
        result = runner.invoke(app, ["--token", "T0KEN", "--port", "70000"])

        assert result.exit_code == 1
        uvicorn_run.assert_not_called()


class TestServe:
    """Test a successful start."""

    def test_serves_on_2112(self, uvicorn_run: MagicMock) -> None:
        """Test the server starts on the default metrics port."""
        result = runner.invoke(app, ["--token", "T0KEN", "--host", "192.168.0.222", "--port", "1702"])

        assert result.exit_code == 0, result.output
        assert "Starting Server on localhost:2112" in result.output
        uvicorn_run.assert_called_once()
        application = uvicorn_run.call_args.args[0]
        assert uvicorn_run.call_args.kwargs["port"] == 2112
        assert uvicorn_run.call_args.kwargs["host"] == "0.0.0.0"
        assert (
            application.state.poller.fetcher.endpoint.url
            == "http://192.168.0.222:1702/api/T0KEN/sensors"
        )

    def test_default_host_is_localhost(self, uvicorn_run: MagicMock) -> None:
        """Test host falls back to localhost."""
        runner.invoke(app, ["--token", "T0KEN", "--port", "80"])

        application = uvicorn_run.call_args.args[0]
        assert application.state.poller.fetcher.endpoint.host == "localhost"

    def test_verbose_flag(self, uvicorn_run: MagicMock) -> None:
        """Test --verbose reaches the poller."""
        runner.invoke(app, ["--token", "T0KEN", "--port", "80", "--verbose"])

        application = uvicorn_run.call_args.args[0]
        assert application.state.poller.verbose is True

    def test_environment_configuration(
        self, uvicorn_run: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test DECONZ_* variables configure the exporter without flags."""
        monkeypatch.setenv("DECONZ_TOKEN", "ENVTOKEN")
        monkeypatch.setenv("DECONZ_PORT", "8080")
        monkeypatch.setenv("DECONZ_VERBOSE", "true")
        monkeypatch.setenv("DECONZ_LISTEN_PORT", "9123")

        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        application = uvicorn_run.call_args.args[0]
        assert application.state.poller.fetcher.endpoint.token == "ENVTOKEN"
        assert application.state.poller.fetcher.endpoint.port == 8080
        assert application.state.poller.verbose is True
        assert uvicorn_run.call_args.kwargs["port"] == 9123

    def test_flags_override_environment(
        self, uvicorn_run: MagicMock, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test command-line flags win over environment variables."""
        monkeypatch.setenv("DECONZ_TOKEN", "ENVTOKEN")
        monkeypatch.setenv("DECONZ_PORT", "8080")

        runner.invoke(app, ["--token", "FLAGTOKEN", "--port", "443"])

        endpoint = uvicorn_run.call_args.args[0].state.poller.fetcher.endpoint
        assert endpoint.token == "FLAGTOKEN"
        assert endpoint.port == 443

    def test_env_file(self, uvicorn_run: MagicMock, tmp_path, monkeypatch) -> None:
        """Test a .env file in the working directory is read."""
        # Register the variables so values loaded from the file are removed on teardown
        for name in ("DECONZ_TOKEN", "DECONZ_PORT"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        (tmp_path / ".env").write_text("DECONZ_TOKEN=FILETOKEN\nDECONZ_PORT=81\n")

        result = runner.invoke(app, [])

        assert result.exit_code == 0, result.output
        endpoint = uvicorn_run.call_args.args[0].state.poller.fetcher.endpoint
        assert endpoint.token == "FILETOKEN"
        assert endpoint.port == 81
