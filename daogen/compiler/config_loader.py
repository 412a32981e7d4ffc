"""Loading of daogen configuration.

Two sources are understood:

- a ``kind: Config`` YAML manifest, whose ``spec`` holds the settings;
- the ``[tool.daogen]`` table of a ``pyproject.toml``.

Lookup order when no path is given: ``DAOGEN_CONFIG_PATH``, then
``pyproject.toml`` in the working directory, then the nearest parent
``pyproject.toml`` that has a ``[tool.daogen]`` table. String values may
reference environment variables as ``${NAME}``. ``DAOGEN_LOG_*`` variables
override the logging section.

Example manifest::

    kind: Config
    metadata:
      name: inventory
    spec:
      generator:
        field_suffix: _daos
      logging:
        level: DEBUG
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import fields
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from daogen.kernel.config.models import DaoGenConfig, GeneratorConfig, LoggingConfig
from daogen.kernel.exceptions import ConfigurationError
from daogen.kernel.logging import get_logger

logger = get_logger(__name__)

_MANIFEST_KIND = "Config"
_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_TRUE_WORDS = frozenset({"1", "true", "yes", "on", "enabled"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", "disabled"})
_SECTIONS = frozenset({"logging", "generator"})


def _parse_bool_env(value: str) -> bool:
    """Read a boolean written the way people write them in env files.

    Raises
    ------
    ValueError
        If the word is not a known true/false spelling
    """
    word = value.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(
        f"Invalid boolean value: {value!r}. Expected one of: {sorted(_TRUE_WORDS | _FALSE_WORDS)}"
    )


@lru_cache(maxsize=32)
def _cached_load(absolute_path: str) -> DaoGenConfig:
    return ConfigLoader().read(Path(absolute_path))


class ConfigLoader:
    """Finds, reads and validates daogen configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> DaoGenConfig:
        """Load the configuration at ``path``, or the discovered one.

        Results are cached per absolute path until ``clear_config_cache``.

        Raises
        ------
        FileNotFoundError
            If ``path`` does not exist, or nothing was discovered
        ConfigurationError
            If the file content is invalid
        """
        config_path = self.locate(path)
        return _cached_load(str(config_path.absolute()))

    def read(self, config_path: Path) -> DaoGenConfig:
        """Read and validate one file, bypassing the cache."""
        logger.info("Loading configuration from {path}", path=config_path)
        if config_path.suffix in _YAML_SUFFIXES:
            section = self._manifest_spec(config_path)
        else:
            section = self._pyproject_section(config_path)
            if section is None:
                logger.warning(
                    "{name} has no [tool.daogen] table, using defaults", name=config_path.name
                )
                return get_default_config()
        return self._build(self.expand_env(section))

    def locate(self, path: str | Path | None = None) -> Path:
        """Return the configuration file to use.

        Raises
        ------
        FileNotFoundError
            If an explicit ``path`` is missing, or no file is discovered
        """
        if path:
            explicit = Path(path)
            if not explicit.exists():
                raise FileNotFoundError(f"Configuration file not found: {explicit}")
            return explicit

        if from_env := os.getenv("DAOGEN_CONFIG_PATH"):
            env_path = Path(from_env)
            if env_path.exists():
                return env_path
            logger.warning("DAOGEN_CONFIG_PATH points to a missing file: {}", env_path)

        local = Path("pyproject.toml")
        if local.exists():
            return local

        for directory in Path.cwd().parents:
            candidate = directory / "pyproject.toml"
            if candidate.exists() and self._pyproject_section(candidate) is not None:
                return candidate

        raise FileNotFoundError(
            "No configuration found: pass a kind: Config YAML file, set "
            "DAOGEN_CONFIG_PATH, or add [tool.daogen] to pyproject.toml"
        )

    def expand_env(self, data: Any) -> Any:
        """Replace ``${NAME}`` in every string of ``data``.

        Unset variables keep their placeholder.
        """
        if isinstance(data, str):
            return self.ENV_VAR_PATTERN.sub(_env_value, data)
        if isinstance(data, dict):
            return {key: self.expand_env(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self.expand_env(item) for item in data]
        return data

    def _manifest_spec(self, config_path: Path) -> dict[str, Any]:
        with config_path.open(encoding="utf-8") as f:
            document = yaml.safe_load(f)

        if not isinstance(document, dict):
            raise ConfigurationError(
                config_path.name, f"expected a mapping, got {type(document).__name__}"
            )
        kind = document.get("kind")
        if kind != _MANIFEST_KIND:
            raise ConfigurationError(
                config_path.name, f"must use 'kind: Config' manifest format, got 'kind: {kind}'"
            )
        spec = document.get("spec") or {}
        if not isinstance(spec, dict):
            raise ConfigurationError(config_path.name, "'spec' must be a mapping")
        return spec

    @staticmethod
    def _pyproject_section(config_path: Path) -> dict[str, Any] | None:
        with config_path.open("rb") as f:
            document = tomllib.load(f)
        section = document.get("tool", {}).get("daogen")
        if section is None and config_path.name != "pyproject.toml":
            # A standalone TOML file holds the settings at top level
            return document
        return section or None

    def _build(self, section: dict[str, Any]) -> DaoGenConfig:
        unknown_sections = set(section) - _SECTIONS
        if unknown_sections:
            raise ConfigurationError("daogen", f"unknown sections: {sorted(unknown_sections)}")
        config = DaoGenConfig(logging=self._logging(section.get("logging") or {}))

        generator = section.get("generator") or {}
        unknown = set(generator) - {f.name for f in fields(GeneratorConfig)}
        if unknown:
            raise ConfigurationError("generator", f"unknown keys: {sorted(unknown)}")
        if generator:
            config.generator = GeneratorConfig(**generator)
        return config

    @staticmethod
    def _logging(section: dict[str, Any]) -> LoggingConfig:
        """Logging settings, with ``DAOGEN_LOG_*`` variables taking precedence."""
        unknown = set(section) - {f.name for f in fields(LoggingConfig)}
        if unknown:
            raise ConfigurationError("logging", f"unknown keys: {sorted(unknown)}")
        values = dict(section)

        if level := os.getenv("DAOGEN_LOG_LEVEL"):
            values["level"] = level.upper()
        if format_name := os.getenv("DAOGEN_LOG_FORMAT"):
            values["format"] = format_name.lower()
        if output_file := os.getenv("DAOGEN_LOG_FILE"):
            values["output_file"] = output_file
        if color := os.getenv("DAOGEN_LOG_COLOR"):
            try:
                values["use_color"] = _parse_bool_env(color)
            except ValueError as e:
                logger.warning("Ignoring DAOGEN_LOG_COLOR: {}", e)

        return LoggingConfig(**values)


def _env_value(match: re.Match[str]) -> str:
    value = os.environ.get(match.group(1))
    return match.group(0) if value is None else value


def load_config(path: str | Path | None = None) -> DaoGenConfig:
    """Load configuration, or return defaults when none is discovered.

    A missing explicit ``path`` still raises ``FileNotFoundError``.
    """
    try:
        return ConfigLoader().load_config_file(path)
    except FileNotFoundError:
        if path:
            raise
        logger.debug("No configuration file found, using defaults")
        return get_default_config()


def clear_config_cache() -> None:
    """Forget cached configurations, e.g. after editing a file."""
    _cached_load.cache_clear()


def get_default_config() -> DaoGenConfig:
    return DaoGenConfig()
