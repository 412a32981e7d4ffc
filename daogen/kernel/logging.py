"""Loguru setup shared by the daogen compiler and CLI.

``get_logger`` hands out loggers bound to a module name. The first call
installs a stderr sink whose level and format come from ``DAOGEN_LOG_LEVEL``
(default WARNING) and ``DAOGEN_LOG_FORMAT`` (default structured), unless
``configure_logging`` ran before.

``configure_logging`` only replaces the sinks daogen installed itself. Sinks
that the host application added to loguru are left in place.

Examples
--------
>>> from daogen.kernel.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Allocated {field}", field="product_dao_cache")
"""

import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, get_args

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger

    from daogen.kernel.config.models import LoggingConfig

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

# Loguru's own stderr sink, removed on first configuration
_LOGURU_DEFAULT_SINK = 0

_active_settings: tuple | None = None
_sink_ids: list[int] = []


def _stderr_sink(format: LogFormat, use_color: bool, include_timestamp: bool) -> dict[str, Any]:
    """Keyword arguments of ``logger.add`` for the terminal sink."""
    timestamp = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""

    if format == "rich":
        handler = RichHandler(show_time=include_timestamp, rich_tracebacks=True, markup=False)
        return {"sink": handler, "format": "{message}"}

    if format == "json":
        return {"sink": sys.stderr, "serialize": True}

    if format == "structured":
        return {
            "sink": sys.stderr,
            "format": (
                f"<green>{timestamp}</green><level>{{level: <8}}</level> "
                "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
            ),
            "colorize": use_color and sys.stderr.isatty(),
        }

    return {
        "sink": sys.stderr,
        "format": f"{timestamp}{{level: <8}} | {{name}} | {{message}}",
        "colorize": False,
    }


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
    backtrace: bool = True,
    diagnose: bool = False,
) -> None:
    """Install daogen's log sinks.

    A repeated call with the same arguments does nothing; different
    arguments replace the sinks of the previous call.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum level written by every sink
    format : LogFormat, default="structured"
        Terminal output: "console" (plain), "json" (one object per line),
        "structured" (loguru markup, colored on a TTY) or "rich"
    output_file : str | Path | None, default=None
        Also write JSON lines to this file; parent directories are created
    use_color : bool, default=True
        Color the structured format when stderr is a TTY
    include_timestamp : bool, default=True
        Prefix records with their time
    force_reconfigure : bool, default=False
        Replace the sinks even when the arguments are unchanged
    backtrace : bool, default=True
        Extend exception tracebacks beyond the catching frame
    diagnose : bool, default=False
        Show variable values in tracebacks
    """
    global _active_settings

    settings = (
        level,
        format,
        str(output_file) if output_file else None,
        use_color,
        include_timestamp,
        backtrace,
        diagnose,
    )
    if settings == _active_settings and not force_reconfigure:
        return

    if _active_settings is None:
        with suppress(ValueError):
            logger.remove(_LOGURU_DEFAULT_SINK)
    while _sink_ids:
        with suppress(ValueError):
            logger.remove(_sink_ids.pop())

    common = {"level": level, "backtrace": backtrace, "diagnose": diagnose}
    _sink_ids.append(logger.add(**_stderr_sink(format, use_color, include_timestamp), **common))

    if output_file:
        path = Path(output_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        _sink_ids.append(logger.add(path, serialize=True, **common))

    _active_settings = settings


def configure_from_config(config: "LoggingConfig", level: LogLevel | None = None) -> None:
    """Apply a loaded ``LoggingConfig``; ``level`` wins over the configured one."""
    configure_logging(
        level=level or config.level,
        format=config.format,
        output_file=config.output_file,
        use_color=config.use_color,
        include_timestamp=config.include_timestamp,
    )


def _configure_from_env() -> None:
    level = os.getenv("DAOGEN_LOG_LEVEL", "WARNING").upper()
    format_type = os.getenv("DAOGEN_LOG_FORMAT", "structured").lower()
    ignored: list[str] = []
    if level not in get_args(LogLevel):
        ignored.append(f"DAOGEN_LOG_LEVEL={level!r}")
        level = "WARNING"
    if format_type not in get_args(LogFormat):
        ignored.append(f"DAOGEN_LOG_FORMAT={format_type!r}")
        format_type = "structured"
    configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
    for setting in ignored:
        logger.warning("Ignoring invalid {setting}", setting=setting)


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Return a logger bound to ``name`` (usually ``__name__``).

    Records carry the name as ``extra["module"]``.
    """
    if _active_settings is None:
        _configure_from_env()
    return logger.bind(module=name)
