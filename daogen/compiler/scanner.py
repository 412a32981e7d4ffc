"""Discovery of factory methods on mapper interfaces.

A mapper interface is an abstract class. Each abstract method is a factory
method: it returns a DAO class, or ``Awaitable`` of one for async mode, and
its parameters are tagged with ``DaoKeyspace``/``DaoTable`` markers through
``typing.Annotated``. This module is the only place that reads those markers.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any

from daogen.compiler.signature import (
    LITERAL_DEFAULT_TYPES,
    MethodSignature,
    Parameter,
    TypeRef,
)
from daogen.kernel.exceptions import ScanError
from daogen.kernel.logging import get_logger
from daogen.kernel.markers import ParameterRole, RoleMarker

if TYPE_CHECKING:
    from daogen.compiler.diagnostics import DiagnosticSink

logger = get_logger(__name__)

_UNSUPPORTED_KINDS = frozenset({
    inspect.Parameter.VAR_POSITIONAL,
    inspect.Parameter.VAR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
})


@dataclass(frozen=True, slots=True)
class FactoryMethodDeclaration:
    """A factory method and the class that constructs its DAOs."""

    signature: MethodSignature
    dao_implementation: TypeRef


@dataclass(frozen=True, slots=True)
class MapperDeclaration:
    """Everything the generator needs to know about a mapper interface."""

    mapper: TypeRef
    factory_methods: tuple[FactoryMethodDeclaration, ...]
    member_names: frozenset[str]
    skipped_methods: tuple[str, ...] = ()


def scan_mapper(mapper: type, sink: DiagnosticSink) -> MapperDeclaration:
    """Read the factory methods declared by ``mapper``.

    Methods that cannot be read are reported to ``sink`` and left out.

    Raises
    ------
    ScanError
        If ``mapper`` is not a class or declares no abstract method
    """
    if not inspect.isclass(mapper):
        raise ScanError(repr(mapper), "not a class")
    abstract = getattr(mapper, "__abstractmethods__", frozenset())
    if not abstract:
        raise ScanError(mapper.__qualname__, "declares no abstract factory method")

    # Definition order, base classes first
    members: dict[str, Any] = {}
    for klass in reversed(mapper.__mro__):
        members.update(vars(klass))

    declarations: list[FactoryMethodDeclaration] = []
    skipped: list[str] = []
    for method_name in members:
        if method_name not in abstract:
            continue
        declaration = _scan_method(mapper, method_name, sink)
        if declaration is None:
            skipped.append(method_name)
        else:
            declarations.append(declaration)

    logger.debug(
        "Scanned {mapper}: {count} factory method(s)",
        mapper=mapper.__qualname__,
        count=len(declarations),
    )
    return MapperDeclaration(
        mapper=TypeRef.of(mapper),
        factory_methods=tuple(declarations),
        member_names=frozenset(dir(mapper)),
        skipped_methods=tuple(skipped),
    )


def _scan_method(
    mapper: type, method_name: str, sink: DiagnosticSink
) -> FactoryMethodDeclaration | None:
    location = f"{mapper.__qualname__}.{method_name}"
    function = getattr(mapper, method_name)
    if not inspect.isfunction(function):
        sink.report(location, "Abstract member is not a plain method")
        return None

    try:
        hints = typing.get_type_hints(function, include_extras=True)
    except NameError as e:
        sink.report(location, f"Cannot resolve annotations: {e}")
        return None

    if "return" not in hints:
        sink.report(location, "Factory method must declare its DAO return type")
        return None
    dao, is_async = _unwrap_return(hints["return"])
    if not inspect.isclass(dao):
        sink.report(
            location,
            f"Return type must be a DAO class or Awaitable of one (got {hints['return']!r})",
        )
        return None

    implementation = getattr(dao, "__dao_implementation__", dao)
    init_name = "init_async" if is_async else "init"
    if not callable(getattr(implementation, init_name, None)):
        sink.report(location, f"{implementation.__qualname__} does not define {init_name}(context)")
        return None

    parameters: list[Parameter] = []
    for param in list(inspect.signature(function).parameters.values())[1:]:
        if param.kind in _UNSUPPORTED_KINDS:
            sink.report(f"{location}({param.name})", "Only positional parameters are supported")
            return None
        annotation, role = _split_annotation(hints.get(param.name, Any))
        has_default = param.default is not inspect.Parameter.empty
        if has_default and type(param.default) not in LITERAL_DEFAULT_TYPES:
            sink.report(
                f"{location}({param.name})",
                f"Default value {param.default!r} cannot be repeated in generated code",
            )
            return None
        parameters.append(
            Parameter(
                name=param.name,
                annotation=TypeRef.of(annotation),
                role=role,
                has_default=has_default,
                default=param.default if has_default else None,
            )
        )

    signature = MethodSignature(
        mapper_name=mapper.__qualname__,
        name=method_name,
        parameters=tuple(parameters),
        return_type=TypeRef.of(dao),
        is_async=is_async,
    )
    return FactoryMethodDeclaration(signature, TypeRef.of(implementation))


def _unwrap_return(annotation: Any) -> tuple[Any, bool]:
    if typing.get_origin(annotation) is Awaitable:
        (inner,) = typing.get_args(annotation)
        return inner, True
    return annotation, False


def _split_annotation(annotation: Any) -> tuple[Any, ParameterRole | None]:
    if typing.get_origin(annotation) is not Annotated:
        return annotation, None
    base, *metadata = typing.get_args(annotation)
    for item in metadata:
        if isinstance(item, RoleMarker) or (
            inspect.isclass(item) and issubclass(item, RoleMarker) and item is not RoleMarker
        ):
            return base, item.role
    return base, None
