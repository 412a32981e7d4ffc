"""Tests for daogen.kernel.config.models."""

import pytest

from daogen.kernel.config.models import (
    DEFAULT_HEADER_COMMENT,
    DaoGenConfig,
    GeneratorConfig,
    LoggingConfig,
)
from daogen.kernel.exceptions import ConfigurationError


class TestGeneratorConfig:
    def test_defaults(self) -> None:
        config = GeneratorConfig()
        assert config.field_suffix == "_cache"
        assert config.implementation_suffix == "Impl"
        assert config.context_attribute == "context"
        assert config.header_comment == DEFAULT_HEADER_COMMENT

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"field_suffix": ""},
            {"field_suffix": "-cache"},
            {"implementation_suffix": "Impl!"},
            {"context_attribute": "1context"},
            {"header_comment": "two\nlines"},
        ],
    )
    def test_invalid_values_raise(self, kwargs: dict) -> None:
        with pytest.raises(ConfigurationError):
            GeneratorConfig(**kwargs)

    def test_custom_values(self) -> None:
        config = GeneratorConfig(field_suffix="_daos", implementation_suffix="Generated")
        assert config.field_suffix == "_daos"
        assert config.implementation_suffix == "Generated"


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "structured"

    def test_trace_level_accepted(self) -> None:
        assert LoggingConfig(level="TRACE").level == "TRACE"

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"level": "verbose"}, "invalid level 'verbose'"),
            ({"level": "debug"}, "invalid level 'debug'"),
            ({"format": "xml"}, "invalid format 'xml'"),
        ],
    )
    def test_invalid_values_raise(self, kwargs: dict, message: str) -> None:
        with pytest.raises(ConfigurationError, match=message):
            LoggingConfig(**kwargs)


class TestDaoGenConfig:
    def test_defaults(self) -> None:
        config = DaoGenConfig()
        assert config.logging == LoggingConfig()
        assert config.generator == GeneratorConfig()
