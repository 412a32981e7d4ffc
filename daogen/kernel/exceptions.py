"""Core exception hierarchy for daogen.

Errors raised while validating a single factory method derive from
SkipGenerationError: they abort generation of that method only, never of its
siblings or of the enclosing mapper.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class DaoGenError(Exception):
    """Root of every exception raised by daogen."""


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(DaoGenError):
    """A configuration value cannot be used.

    Examples
    --------
    Example usage::

        raise ConfigurationError("generator", "field_suffix must be a valid identifier")
    """

    def __init__(self, component: str, reason: str) -> None:
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(DaoGenError):
    """A runtime value, such as a CQL identifier, is malformed.

    Parameters
    ----------
    field : str
        What was being validated
    constraint : str
        The rule the value breaks
    value : object, optional
        The offending value, echoed in the message when given

    Examples
    --------
    Example usage::

        raise ValidationError("identifier", "needs double quotes", value="My Table")
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


class ScanError(DaoGenError):
    """Raised when a mapper class cannot be scanned at all.

    Problems local to one method are reported as diagnostics instead.
    """

    def __init__(self, mapper: str, reason: str) -> None:
        self.mapper = mapper
        self.reason = reason
        super().__init__(f"Cannot scan mapper '{mapper}': {reason}")


# ============================================================================
# Per-method Generation Errors
# ============================================================================


class SkipGenerationError(DaoGenError):
    """Signals that generation of the current method must be skipped.

    The problem has already been reported through the diagnostic sink when
    this is raised; callers only need to move on to the next method.
    """

    def __init__(self, location: str, message: str) -> None:
        self.location = location
        self.message = message
        super().__init__(f"{location}: {message}")


class DuplicateRoleParameterError(SkipGenerationError):
    """More than one parameter carries the same role marker."""

    __slots__ = ()


class InvalidRoleParameterTypeError(SkipGenerationError):
    """A role-marked parameter is neither ``str`` nor ``Identifier``."""

    __slots__ = ()


class UnrecognizedParameterError(SkipGenerationError):
    """A parameter carries no role marker."""

    __slots__ = ()


class ReservedParameterNameError(SkipGenerationError):
    """A parameter hides a name that the generated method body refers to."""

    __slots__ = ()
