"""Unit tests for CLI commands.

Tests CLI behavior using Click's CliRunner for isolated, fast testing.
Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

import functools
import json
from pathlib import Path
from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from telegram_log_handler import __version__
from telegram_log_handler.cli import cli
from telegram_log_handler.config import create_handler

TOKEN = "123456:TEST-token_abc"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Minimal environment configuration."""
    for name in ("TIMEZONE", "DATE_FORMAT", "LEVEL", "TIMEOUT", "VERIFY_TLS", "PARSE_MODE", "DISABLE_NOTIFICATION"):
        monkeypatch.delenv(f"TELEGRAM_LOG_{name}", raising=False)
    monkeypatch.setenv("TELEGRAM_LOG_TOKEN", TOKEN)
    monkeypatch.setenv("TELEGRAM_LOG_CHANNEL", "@alerts")


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "telegram-log.json"
    path.write_text(json.dumps({"token": TOKEN, "channel": "@from_file", "date_format": "Y-m-d", "level": "WARNING"}))
    return path


@pytest.fixture
def wire(make_http_client, responder):
    """Route the send command's handler through the mock transport."""
    factory = functools.partial(create_handler, http_client=make_http_client(responder))
    with patch("telegram_log_handler.cli.commands.send.create_handler", factory):
        yield responder


class TestVersion:
    """Tests for --version flag."""

    @pytest.mark.parametrize("flag", ["--version", "-v"])
    def test_version_flag_shows_version(self, runner: CliRunner, flag: str) -> None:
        result = runner.invoke(cli, [flag])

        assert result.exit_code == 0
        assert f"telegram-log-handler {__version__}" in result.output


class TestHelp:
    """Tests for help output."""

    def test_root_help_shows_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "send" in result.output
        assert "config" in result.output
        assert "Quick Start" in result.output

    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "Usage" in result.output


class TestSend:
    """Tests for the send command."""

    def test_delivered_message(self, runner: CliRunner, env, wire) -> None:
        # Act
        result = runner.invoke(cli, ["send", "disk full", "--level", "error"])

        # Assert
        assert result.exit_code == 0, result.output
        assert "Message delivered to @alerts" in result.output
        form = wire.last_form
        assert form["chat_id"] == "@alerts"
        assert form["text"].endswith("\n🚨 disk full")

    def test_context_option(self, runner: CliRunner, env, wire) -> None:
        result = runner.invoke(cli, ["send", "deploy", "--level", "info", "--context", '{"version": "1.2"}'])

        assert result.exit_code == 0, result.output
        assert wire.last_form["text"].endswith('\n‍🗨 deploy{"version":"1.2"}')

    def test_bypasses_configured_level(self, runner: CliRunner, config_file: Path, wire) -> None:
        # Arrange - config level is WARNING, record is DEBUG
        # Act
        result = runner.invoke(cli, ["send", "probe", "--level", "debug", "--config", str(config_file)])

        # Assert
        assert result.exit_code == 0, result.output
        assert wire.last_form["chat_id"] == "@from_file"
        assert wire.last_form["text"].endswith("\n🚧 probe")

    def test_rejected_message_exits_1(self, runner: CliRunner, env, wire) -> None:
        # Arrange
        wire.body = {"ok": False, "description": "Bad Request: chat not found"}

        # Act
        result = runner.invoke(cli, ["send", "x"])

        # Assert
        assert result.exit_code == 1
        assert "chat not found" in result.output

    def test_transport_failure_exits_1_without_token(self, runner: CliRunner, env, wire) -> None:
        wire.exc = httpx.ConnectError(f"cannot reach bot{TOKEN}")

        result = runner.invoke(cli, ["send", "x"])

        assert result.exit_code == 1
        assert "Delivery failed" in result.output
        assert TOKEN not in result.output

    def test_unusable_token_exits_1(self, runner: CliRunner, env, wire, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange - trailing newline left over from a secrets file
        monkeypatch.setenv("TELEGRAM_LOG_TOKEN", TOKEN + "\n")

        # Act
        result = runner.invoke(cli, ["send", "x"])

        # Assert
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Delivery failed" in result.output
        assert wire.requests == []

    def test_invalid_context_is_usage_error(self, runner: CliRunner, env, wire) -> None:
        result = runner.invoke(cli, ["send", "x", "--context", "[1, 2]"])

        assert result.exit_code == 2
        assert wire.requests == []

    def test_missing_configuration_exits_1(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("TELEGRAM_LOG_TOKEN", raising=False)
        monkeypatch.delenv("TELEGRAM_LOG_CHANNEL", raising=False)

        result = runner.invoke(cli, ["send", "x"])

        assert result.exit_code == 1
        assert "TELEGRAM_LOG_TOKEN" in result.output


class TestConfigShow:
    """Tests for config show."""

    def test_masks_token(self, runner: CliRunner, env) -> None:
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert TOKEN not in result.output
        assert "channel: @alerts" in result.output
        assert "(default)" in result.output

    def test_json_output_masks_token(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["config", "show", "--json", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["channel"] == "@from_file"
        assert data["level"] == "WARNING"
        assert data["token"] != TOKEN

    def test_missing_file_exits_1(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["config", "show", "--config", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "not found" in result.output


class TestConfigValidate:
    """Tests for config validate."""

    def test_valid(self, runner: CliRunner, config_file: Path) -> None:
        result = runner.invoke(cli, ["config", "validate", "--config", str(config_file)])

        assert result.exit_code == 0
        assert "Configuration is valid" in result.output

    def test_invalid(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"token": TOKEN, "channel": "@a", "timeout": 0}))

        result = runner.invoke(cli, ["config", "validate", "--config", str(path)])

        assert result.exit_code == 1
        assert "timeout" in result.output

    def test_warns_when_tls_disabled(self, runner: CliRunner, env, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TELEGRAM_LOG_VERIFY_TLS", "false")

        result = runner.invoke(cli, ["config", "validate"])

        assert result.exit_code == 0
        assert "TLS certificate verification is disabled" in result.output
