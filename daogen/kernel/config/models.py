"""Configuration data models for daogen."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import get_args

from daogen.kernel.exceptions import ConfigurationError
from daogen.kernel.logging import LogFormat, LogLevel

DEFAULT_HEADER_COMMENT = "Generated by daogen. Do not edit."


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for daogen.

    Attributes
    ----------
    level : str, default="INFO"
        Log level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.daogen.logging]
    level = "DEBUG"
    format = "rich"
    ```

    Environment variable overrides:

    ```bash
    export DAOGEN_LOG_LEVEL=DEBUG
    export DAOGEN_LOG_FORMAT=rich
    export DAOGEN_LOG_FILE=/tmp/daogen.log
    ```
    """

    level: LogLevel = "INFO"
    format: LogFormat = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.level not in get_args(LogLevel):
            raise ConfigurationError("logging", f"invalid level {self.level!r}")
        if self.format not in get_args(LogFormat):
            raise ConfigurationError("logging", f"invalid format {self.format!r}")


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Naming conventions used by the mapper implementation generator.

    Attributes
    ----------
    field_suffix : str
        Appended to a factory method name to suggest its cache field name.
    implementation_suffix : str
        Appended to the mapper class name to name the generated class.
    context_attribute : str
        Attribute of the generated class holding the mapper context.
    header_comment : str
        Comment line written at the top of every rendered module.
    """

    field_suffix: str = "_cache"
    implementation_suffix: str = "Impl"
    context_attribute: str = "context"
    header_comment: str = DEFAULT_HEADER_COMMENT

    def __post_init__(self) -> None:
        """Validate naming settings.

        Raises
        ------
        ConfigurationError
            If a suffix or attribute name cannot form a Python identifier
        """
        if not self.field_suffix or not f"x{self.field_suffix}".isidentifier():
            raise ConfigurationError("generator", f"invalid field_suffix {self.field_suffix!r}")
        if not self.implementation_suffix or not f"X{self.implementation_suffix}".isidentifier():
            raise ConfigurationError(
                "generator", f"invalid implementation_suffix {self.implementation_suffix!r}"
            )
        if not self.context_attribute.isidentifier():
            raise ConfigurationError(
                "generator", f"invalid context_attribute {self.context_attribute!r}"
            )
        if "\n" in self.header_comment:
            raise ConfigurationError("generator", "header_comment must be a single line")


@dataclass(slots=True)
class DaoGenConfig:
    """Complete daogen configuration.

    Attributes
    ----------
    logging : LoggingConfig
        Logging configuration
    generator : GeneratorConfig
        Code generation naming conventions

    Examples
    --------
    TOML configuration in pyproject.toml:

    ```toml
    [tool.daogen.generator]
    field_suffix = "_dao_cache"
    implementation_suffix = "Generated"

    [tool.daogen.logging]
    level = "DEBUG"
    ```
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
