"""Configuration models for daogen."""

from daogen.kernel.config.models import DaoGenConfig, GeneratorConfig, LoggingConfig

__all__ = ["DaoGenConfig", "GeneratorConfig", "LoggingConfig"]
