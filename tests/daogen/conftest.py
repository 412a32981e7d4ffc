"""Fixtures shared by the daogen test suite."""

from __future__ import annotations

from typing import Any

import pytest
from sample_mappers import ProductDao

from daogen.compiler.config_loader import clear_config_cache
from daogen.compiler.diagnostics import DiagnosticReport
from daogen.compiler.mapper_generator import generate_mapper_source
from daogen.kernel.config.models import GeneratorConfig
from daogen.kernel.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_state():
    """Start every test with no recorded DAOs and no cached configuration."""
    configure_logging(level="WARNING", format="console")
    ProductDao.created.clear()
    clear_config_cache()
    yield
    ProductDao.created.clear()
    clear_config_cache()


@pytest.fixture
def implement():
    """Generate, compile and return the implementation class of a mapper."""

    def _implement(mapper: type, config: GeneratorConfig | None = None) -> type:
        config = config or GeneratorConfig()
        report = DiagnosticReport()
        source = generate_mapper_source(mapper, report, config)
        assert not report.has_errors, report.diagnostics
        namespace: dict[str, Any] = {}
        class_name = f"{mapper.__name__}{config.implementation_suffix}"
        exec(compile(source, f"<{class_name}>", "exec"), namespace)
        return namespace[class_name]

    return _implement
