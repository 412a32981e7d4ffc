"""Tests for daogen.kernel.logging."""

import json

from daogen.kernel import logging as daogen_logging
from daogen.kernel.config.models import LoggingConfig
from daogen.kernel.logging import configure_from_config, configure_logging, get_logger


class TestConfigureLogging:
    def test_idempotent(self) -> None:
        configure_logging(level="INFO", format="console", force_reconfigure=True)
        handlers = list(daogen_logging._sink_ids)

        configure_logging(level="INFO", format="console")
        assert daogen_logging._sink_ids == handlers

    def test_reconfigure_replaces_handlers(self) -> None:
        configure_logging(level="INFO", format="console", force_reconfigure=True)
        configure_logging(level="DEBUG", format="structured")
        assert len(daogen_logging._sink_ids) == 1

    def test_output_file_receives_json(self, tmp_path) -> None:
        log_file = tmp_path / "logs" / "daogen.log"
        configure_logging(level="INFO", format="console", output_file=log_file)

        get_logger("test_logging").info("Generated {name}", name="InventoryMapperImpl")
        configure_logging(level="WARNING", format="console")

        record = json.loads(log_file.read_text().splitlines()[-1])
        assert record["record"]["message"] == "Generated InventoryMapperImpl"
        assert record["record"]["extra"]["module"] == "test_logging"


class TestGetLogger:
    def test_cached_per_name(self) -> None:
        assert get_logger("a") is get_logger("a")
        assert get_logger("a") is not get_logger("b")


class TestConfigureFromConfig:
    def test_level_override(self) -> None:
        configure_from_config(LoggingConfig(level="ERROR", format="console"), level="DEBUG")
        assert daogen_logging._active_settings[:2] == ("DEBUG", "console")

        configure_from_config(LoggingConfig(level="ERROR", format="console"))
        assert daogen_logging._active_settings[:2] == ("ERROR", "console")


class TestConfigureFromEnv:
    def test_invalid_values_fall_back(self, monkeypatch) -> None:
        monkeypatch.setattr(daogen_logging, "_active_settings", None)
        monkeypatch.setenv("DAOGEN_LOG_LEVEL", "verbose")
        monkeypatch.setenv("DAOGEN_LOG_FORMAT", "xml")

        daogen_logging._configure_from_env()
        assert daogen_logging._active_settings[:2] == ("WARNING", "structured")

    def test_valid_values_are_normalized(self, monkeypatch) -> None:
        monkeypatch.setattr(daogen_logging, "_active_settings", None)
        monkeypatch.setenv("DAOGEN_LOG_LEVEL", "error")
        monkeypatch.setenv("DAOGEN_LOG_FORMAT", "JSON")

        daogen_logging._configure_from_env()
        assert daogen_logging._active_settings[:2] == ("ERROR", "json")
