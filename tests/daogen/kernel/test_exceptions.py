"""Tests for the daogen exception hierarchy."""

from __future__ import annotations

import pytest

from daogen.kernel.exceptions import (
    ConfigurationError,
    DaoGenError,
    DuplicateRoleParameterError,
    InvalidRoleParameterTypeError,
    ReservedParameterNameError,
    ScanError,
    SkipGenerationError,
    UnrecognizedParameterError,
    ValidationError,
)


class TestDaoGenError:
    def test_basic_creation(self) -> None:
        error = DaoGenError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert isinstance(error, Exception)


class TestConfigurationError:
    def test_attributes(self) -> None:
        error = ConfigurationError("generator", "bad suffix")
        assert error.component == "generator"
        assert error.reason == "bad suffix"
        assert "generator" in str(error)
        assert isinstance(error, DaoGenError)


class TestValidationError:
    def test_with_value(self) -> None:
        error = ValidationError("identifier", "needs double quotes", value="a b")
        assert "'a b'" in str(error)
        assert error.value == "a b"

    def test_without_value(self) -> None:
        error = ValidationError("identifier", "cannot be empty")
        assert str(error) == "Validation failed for 'identifier': cannot be empty"


class TestScanError:
    def test_attributes(self) -> None:
        error = ScanError("InventoryMapper", "not a class")
        assert error.mapper == "InventoryMapper"
        assert "not a class" in str(error)


class TestSkipGenerationErrors:
    @pytest.mark.parametrize(
        "error_type",
        [
            DuplicateRoleParameterError,
            InvalidRoleParameterTypeError,
            UnrecognizedParameterError,
            ReservedParameterNameError,
        ],
    )
    def test_subclasses_signal_skip(self, error_type: type[SkipGenerationError]) -> None:
        error = error_type("Mapper.method(param)", "message")
        assert isinstance(error, SkipGenerationError)
        assert isinstance(error, DaoGenError)
        assert error.location == "Mapper.method(param)"
        assert error.message == "message"
        assert str(error) == "Mapper.method(param): message"
