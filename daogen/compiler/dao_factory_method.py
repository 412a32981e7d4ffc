"""Generates the implementation of a DAO-producing method of a mapper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from daogen.compiler import codegen
from daogen.compiler.body_emitter import CACHE_KEY_NAME, emit_body
from daogen.compiler.caching_strategy import CachingMode, select_caching_mode
from daogen.compiler.parameter_validator import validate_parameters
from daogen.kernel.config.models import GeneratorConfig
from daogen.kernel.exceptions import ReservedParameterNameError
from daogen.kernel.logging import get_logger

if TYPE_CHECKING:
    import ast

    from daogen.compiler.diagnostics import DiagnosticSink
    from daogen.compiler.field_allocator import FieldAllocator
    from daogen.compiler.signature import MethodSignature, TypeRef

logger = get_logger(__name__)


class DaoFactoryMethodGenerator:
    """Turns one factory method declaration into its overriding implementation.

    Parameters are validated on construction: an invalid declaration is
    reported to ``sink`` and raises a ``SkipGenerationError`` before any
    field is allocated, so nothing is ever emitted for it.

    Parameters
    ----------
    signature : MethodSignature
        The declared method
    dao_implementation : TypeRef
        Class providing the ``init``/``init_async`` construction calls
    enclosing_class : FieldAllocator
        Generated class receiving the cache field
    sink : DiagnosticSink
        Receiver of validation problems
    config : GeneratorConfig | None
        Naming conventions; defaults apply when omitted
    """

    def __init__(
        self,
        signature: MethodSignature,
        dao_implementation: TypeRef,
        enclosing_class: FieldAllocator,
        sink: DiagnosticSink,
        config: GeneratorConfig | None = None,
    ) -> None:
        self.signature = signature
        self.dao_implementation = dao_implementation
        self.enclosing_class = enclosing_class
        self.sink = sink
        self.config = config or GeneratorConfig()

        validated = validate_parameters(signature, sink)
        self.keyspace_argument_name = validated.keyspace
        self.table_argument_name = validated.table
        self.mode = select_caching_mode(validated.keyspace, validated.table)
        if self.mode is CachingMode.KEYED:
            self._check_body_names(sink)

    def _check_body_names(self, sink: DiagnosticSink) -> None:
        # A KEYED body refers to these names from the module scope
        body_names = {CACHE_KEY_NAME, self.dao_implementation.import_name}
        for parameter in self.signature.parameters:
            if parameter.name in body_names:
                location = self.signature.location(parameter)
                message = f"Parameter name '{parameter.name}' hides a name the method body uses"
                sink.report(location, message)
                raise ReservedParameterNameError(location, message)

    @property
    def is_cached_by_keyspace_and_table(self) -> bool:
        return self.mode is CachingMode.KEYED

    def generate(self) -> ast.FunctionDef:
        """Allocate the cache field and build the overriding method."""
        suggested_field_name = f"{self.signature.name}{self.config.field_suffix}"
        if self.is_cached_by_keyspace_and_table:
            field_name = self.enclosing_class.add_dao_map_field(
                suggested_field_name, self.signature.return_type
            )
        else:
            field_name = self.enclosing_class.add_dao_simple_field(
                suggested_field_name,
                self.signature.return_type,
                self.dao_implementation,
                self.signature.is_async,
            )
        if field_name != suggested_field_name:
            self.sink.warn(
                self.signature.location(),
                f"Field '{suggested_field_name}' is taken, using '{field_name}'",
            )

        logger.debug(
            "Generating {location} ({mode}) into field {field}",
            location=self.signature.location(),
            mode=self.mode.value,
            field=field_name,
        )
        body = emit_body(
            self.mode,
            field_name,
            self.dao_implementation,
            self.signature.is_async,
            self.keyspace_argument_name,
            self.table_argument_name,
            self.config.context_attribute,
        )
        return codegen.override(self.signature, body)
