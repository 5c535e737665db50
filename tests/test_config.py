"""Tests for configuration models and loading."""

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from telegram_log_handler.config import TelegramHandlerConfig, create_handler
from telegram_log_handler.exceptions import ConfigurationError

TOKEN = "123456:TEST-token_abc"


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def valid_config_dict() -> dict:
    """Minimal valid configuration."""
    return {"token": TOKEN, "channel": "@alerts"}


@pytest.fixture
def config_file(tmp_path: Path, valid_config_dict: dict) -> Path:
    """Write valid config to temp file and return path."""
    path = tmp_path / "telegram-log.json"
    path.write_text(json.dumps(valid_config_dict))
    return path


# ============================================================================
# Model validation
# ============================================================================


class TestTelegramHandlerConfig:
    """Model validation tests."""

    def test_defaults(self, valid_config_dict: dict):
        # Act
        config = TelegramHandlerConfig.model_validate(valid_config_dict)

        # Assert
        assert config.timezone == "UTC"
        assert config.date_format == "F j, Y, g:i a"
        assert config.level == "ERROR"
        assert config.timeout == 10.0
        assert config.verify_tls is True
        assert config.parse_mode is None
        assert config.disable_notification is False

    def test_token_is_masked(self, valid_config_dict: dict):
        config = TelegramHandlerConfig.model_validate(valid_config_dict)

        assert TOKEN not in repr(config)
        assert TOKEN not in json.dumps(config.model_dump(mode="json"))
        assert config.token.get_secret_value() == TOKEN

    @pytest.mark.parametrize("missing", ["token", "channel"])
    def test_requires_token_and_channel(self, valid_config_dict: dict, missing: str):
        del valid_config_dict[missing]
        with pytest.raises(ValidationError):
            TelegramHandlerConfig.model_validate(valid_config_dict)

    @pytest.mark.parametrize("timeout", [0, 0.1, 121, -1])
    def test_rejects_out_of_range_timeout(self, valid_config_dict: dict, timeout: float):
        with pytest.raises(ValidationError):
            TelegramHandlerConfig.model_validate({**valid_config_dict, "timeout": timeout})

    @pytest.mark.parametrize("level", ["TRACE", "error", ""])
    def test_rejects_invalid_level(self, valid_config_dict: dict, level: str):
        with pytest.raises(ValidationError):
            TelegramHandlerConfig.model_validate({**valid_config_dict, "level": level})

    @pytest.mark.parametrize(
        "level, levelno",
        [("DEBUG", 10), ("NOTICE", 25), ("ERROR", 40), ("EMERGENCY", 70)],
    )
    def test_levelno(self, valid_config_dict: dict, level: str, levelno: int):
        config = TelegramHandlerConfig.model_validate({**valid_config_dict, "level": level})
        assert config.levelno == levelno

    def test_extra_fields(self, valid_config_dict: dict):
        config = TelegramHandlerConfig.model_validate(
            {**valid_config_dict, "parse_mode": "MarkdownV2", "disable_notification": True}
        )
        assert config.extra_fields() == {"parse_mode": "MarkdownV2", "disable_notification": True}

    def test_no_extra_fields_by_default(self, valid_config_dict: dict):
        assert TelegramHandlerConfig.model_validate(valid_config_dict).extra_fields() == {}


# ============================================================================
# File loading
# ============================================================================


class TestLoadFromFile:
    """JSON file loading."""

    def test_loads_valid_file(self, config_file: Path):
        config = TelegramHandlerConfig.load_from_file(config_file)

        assert config.channel == "@alerts"

    def test_missing_file_raises_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="not found"):
            TelegramHandlerConfig.load_from_file(tmp_path / "missing.json")

    def test_invalid_json_raises_configuration_error(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            TelegramHandlerConfig.load_from_file(path)

    def test_validation_errors_name_the_field(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"token": TOKEN}))

        with pytest.raises(ConfigurationError, match="channel"):
            TelegramHandlerConfig.load_from_file(path)

    def test_configuration_error_is_value_error(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("[]")

        with pytest.raises(ValueError):
            TelegramHandlerConfig.load_from_file(path)


# ============================================================================
# Environment loading
# ============================================================================


class TestFromEnviron:
    """TELEGRAM_LOG_* loading."""

    def test_loads_all_variables(self):
        # Arrange
        environ = {
            "TELEGRAM_LOG_TOKEN": TOKEN,
            "TELEGRAM_LOG_CHANNEL": "-100123",
            "TELEGRAM_LOG_TIMEZONE": "Europe/Berlin",
            "TELEGRAM_LOG_DATE_FORMAT": "Y-m-d",
            "TELEGRAM_LOG_LEVEL": "WARNING",
            "TELEGRAM_LOG_TIMEOUT": "2.5",
            "TELEGRAM_LOG_VERIFY_TLS": "false",
            "TELEGRAM_LOG_PARSE_MODE": "HTML",
            "TELEGRAM_LOG_DISABLE_NOTIFICATION": "1",
        }

        # Act
        config = TelegramHandlerConfig.from_environ(environ)

        # Assert
        assert config.channel == "-100123"
        assert config.timezone == "Europe/Berlin"
        assert config.date_format == "Y-m-d"
        assert config.level == "WARNING"
        assert config.timeout == 2.5
        assert config.verify_tls is False
        assert config.parse_mode == "HTML"
        assert config.disable_notification is True

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TELEGRAM_LOG_TOKEN", TOKEN)
        monkeypatch.setenv("TELEGRAM_LOG_CHANNEL", "@alerts")

        assert TelegramHandlerConfig.from_environ().channel == "@alerts"

    def test_missing_variables_are_listed(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TelegramHandlerConfig.from_environ({"TELEGRAM_LOG_TOKEN": TOKEN})

        assert "TELEGRAM_LOG_CHANNEL" in str(exc_info.value)
        assert "TELEGRAM_LOG_TOKEN" not in str(exc_info.value)

    def test_invalid_value_names_the_variable(self):
        environ = {"TELEGRAM_LOG_TOKEN": TOKEN, "TELEGRAM_LOG_CHANNEL": "@a", "TELEGRAM_LOG_TIMEOUT": "soon"}

        with pytest.raises(ConfigurationError, match="TELEGRAM_LOG_TIMEOUT"):
            TelegramHandlerConfig.from_environ(environ)

    def test_load_prefers_file(self, config_file: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TELEGRAM_LOG_TOKEN", TOKEN)
        monkeypatch.setenv("TELEGRAM_LOG_CHANNEL", "@from_env")

        assert TelegramHandlerConfig.load(config_file).channel == "@alerts"
        assert TelegramHandlerConfig.load(None).channel == "@from_env"


# ============================================================================
# Handler factory
# ============================================================================


class TestCreateHandler:
    """create_handler() wiring."""

    def test_builds_configured_handler(self, valid_config_dict: dict, make_http_client, responder):
        # Arrange
        config = TelegramHandlerConfig.model_validate(
            {**valid_config_dict, "level": "WARNING", "timezone": "Asia/Tokyo", "date_format": "Y", "parse_mode": "HTML"}
        )

        # Act
        handler = create_handler(config, http_client=make_http_client(responder))

        # Assert
        try:
            assert handler.level == logging.WARNING
            assert handler.timezone == "Asia/Tokyo"
            assert handler.date_format == "Y"
            assert handler.extra_fields == {"parse_mode": "HTML"}
            assert handler.client.token == TOKEN
            assert handler.client.channel == "@alerts"
            assert handler.client.timeout == 10.0
            assert handler.client.verify is True
        finally:
            handler.close()
