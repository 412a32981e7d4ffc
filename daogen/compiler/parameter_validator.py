"""Validation of factory method parameters.

A factory method may declare at most one keyspace override and at most one
table override, each typed ``str`` or ``Identifier``. Any other parameter is
rejected. Each violation is reported once through the sink, then raised as a
``SkipGenerationError`` subclass so that only the offending method is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from daogen.compiler.signature import IDENTIFIER_TYPE, TEXT_TYPE
from daogen.kernel.exceptions import (
    DuplicateRoleParameterError,
    InvalidRoleParameterTypeError,
    UnrecognizedParameterError,
)
from daogen.kernel.markers import ParameterRole

if TYPE_CHECKING:
    from daogen.compiler.diagnostics import DiagnosticSink
    from daogen.compiler.signature import MethodSignature, Parameter

_ALLOWED_ROLE_TYPES = (TEXT_TYPE, IDENTIFIER_TYPE)


@dataclass(frozen=True, slots=True)
class ValidatedParameters:
    """Names of the override parameters, ``None`` where not declared."""

    keyspace: str | None = None
    table: str | None = None


def validate_parameters(signature: MethodSignature, sink: DiagnosticSink) -> ValidatedParameters:
    """Partition the parameters of ``signature`` into keyspace and table overrides.

    Raises
    ------
    DuplicateRoleParameterError
        If two parameters carry the same role
    InvalidRoleParameterTypeError
        If a role-marked parameter is not ``str`` or ``Identifier``
    UnrecognizedParameterError
        If a parameter carries no role
    """
    keyspace: Parameter | None = None
    table: Parameter | None = None
    for parameter in signature.parameters:
        if parameter.role is ParameterRole.KEYSPACE:
            keyspace = _validate_role_parameter(signature, parameter, keyspace, sink)
        elif parameter.role is ParameterRole.TABLE:
            table = _validate_role_parameter(signature, parameter, table, sink)
        else:
            location = signature.location(parameter)
            message = (
                f"Only parameters annotated with @{ParameterRole.KEYSPACE.marker_name} "
                f"or @{ParameterRole.TABLE.marker_name} are allowed"
            )
            sink.report(location, message)
            raise UnrecognizedParameterError(location, message)

    return ValidatedParameters(
        keyspace=keyspace.name if keyspace else None,
        table=table.name if table else None,
    )


def _validate_role_parameter(
    signature: MethodSignature,
    candidate: Parameter,
    previous: Parameter | None,
    sink: DiagnosticSink,
) -> Parameter:
    assert candidate.role is not None
    marker = candidate.role.marker_name
    location = signature.location(candidate)

    if previous is not None:
        message = f"Only one parameter can be annotated with @{marker}"
        sink.report(location, message)
        raise DuplicateRoleParameterError(location, message)

    if candidate.annotation not in _ALLOWED_ROLE_TYPES:
        message = (
            f"@{marker}-annotated parameter must be of type "
            f"{TEXT_TYPE.qualname} or {IDENTIFIER_TYPE.qualname} (got {candidate.annotation})"
        )
        sink.report(location, message)
        raise InvalidRoleParameterTypeError(location, message)

    return candidate
