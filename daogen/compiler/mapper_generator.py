"""Generation of mapper implementation modules.

The generator subclasses the mapper interface, implements every factory
method through ``DaoFactoryMethodGenerator`` and acts as the field allocator
for them. Fields are initialised in the generated ``__init__``::

    class InventoryMapperImpl(InventoryMapper):
        def __init__(self, context: MapperContext) -> None:
            self.context = context
            self.product_dao_cache = ProductDao.init(context)
            self.product_dao_async_cache = AsyncLazyReference(
                lambda: ProductDao.init_async(context)
            )
            self.product_dao_in_cache = DaoCache()

A method that fails validation is skipped; its siblings are still generated.
"""

from __future__ import annotations

import ast
from collections import defaultdict
from typing import TYPE_CHECKING

from daogen.compiler import codegen
from daogen.compiler.body_emitter import CACHE_KEY_NAME
from daogen.compiler.dao_factory_method import DaoFactoryMethodGenerator
from daogen.compiler.diagnostics import DiagnosticReport
from daogen.compiler.field_allocator import DaoMapField, DaoSimpleField, NameIndex
from daogen.compiler.scanner import scan_mapper
from daogen.kernel.config.models import GeneratorConfig
from daogen.kernel.exceptions import ScanError, SkipGenerationError
from daogen.kernel.logging import get_logger

if TYPE_CHECKING:
    from daogen.compiler.diagnostics import DiagnosticSink
    from daogen.compiler.scanner import MapperDeclaration
    from daogen.compiler.signature import TypeRef

logger = get_logger(__name__)

RUNTIME_MODULE = "daogen.runtime"
_AWAITABLE_MODULE = "collections.abc"


class MapperImplementationGenerator:
    """Builds the implementation module of one mapper interface.

    Parameters
    ----------
    declaration : MapperDeclaration
        Result of scanning the mapper interface
    sink : DiagnosticSink | None
        Receiver of validation problems; a fresh DiagnosticReport by default
    config : GeneratorConfig | None
        Naming conventions; defaults apply when omitted
    """

    def __init__(
        self,
        declaration: MapperDeclaration,
        sink: DiagnosticSink | None = None,
        config: GeneratorConfig | None = None,
    ) -> None:
        self.declaration = declaration
        self.sink = sink if sink is not None else DiagnosticReport()
        self.config = config or GeneratorConfig()

        self._name_index = NameIndex(
            reserved={*declaration.member_names, self.config.context_attribute}
        )
        self._simple_fields: list[DaoSimpleField] = []
        self._map_fields: list[DaoMapField] = []
        self._imports: dict[str, set[str]] = defaultdict(set)
        self._module: ast.Module | None = None

        self.generated_methods: list[str] = []
        self.skipped_methods: list[str] = list(declaration.skipped_methods)

    @property
    def class_name(self) -> str:
        mapper_name = self.declaration.mapper.qualname.replace(".", "_")
        return f"{mapper_name}{self.config.implementation_suffix}"

    # Field allocation

    def add_dao_simple_field(
        self,
        suggested_name: str,
        value_type: TypeRef,
        dao_implementation: TypeRef,
        is_async: bool,
    ) -> str:
        field_name = self._name_index.unique_field(suggested_name)
        self._simple_fields.append(
            DaoSimpleField(field_name, value_type, dao_implementation, is_async)
        )
        return field_name

    def add_dao_map_field(self, suggested_name: str, value_type: TypeRef) -> str:
        field_name = self._name_index.unique_field(suggested_name)
        self._map_fields.append(DaoMapField(field_name, value_type))
        return field_name

    # Generation

    def generate(self) -> ast.Module:
        """Build the module; later calls return the same tree."""
        if self._module is not None:
            return self._module

        mapper = self.declaration.mapper
        if self.config.context_attribute in self.declaration.member_names:
            raise ScanError(
                mapper.qualname,
                f"member {self.config.context_attribute!r} clashes with the context attribute",
            )
        self._require(mapper)
        self._require_runtime("MapperContext")

        methods: list[ast.stmt] = []
        for declaration in self.declaration.factory_methods:
            signature = declaration.signature
            try:
                method_generator = DaoFactoryMethodGenerator(
                    signature, declaration.dao_implementation, self, self.sink, self.config
                )
            except SkipGenerationError as e:
                logger.debug("Skipping {location}: {reason}", location=e.location, reason=e.message)
                self.skipped_methods.append(signature.name)
                continue

            methods.append(method_generator.generate())
            self.generated_methods.append(signature.name)
            self._require(signature.return_type)
            self._require(declaration.dao_implementation)
            for parameter in signature.parameters:
                self._require(parameter.annotation)
            if signature.is_async:
                self._imports[_AWAITABLE_MODULE].add(codegen.AWAITABLE_NAME)

        if self._map_fields:
            self._require_runtime(CACHE_KEY_NAME, "DaoCache")
        if any(f.is_async for f in self._simple_fields):
            self._require_runtime("AsyncLazyReference")

        class_def = ast.ClassDef(
            name=self.class_name,
            bases=[codegen.type_expression(mapper)],
            keywords=[],
            body=[
                ast.Expr(value=ast.Constant(value=f"Generated implementation of {mapper}.")),
                self._init_method(),
                *methods,
            ],
            decorator_list=[],
            type_params=[],
        )
        module = ast.Module(
            body=[
                ast.Expr(value=ast.Constant(value=f"Implementation of {mapper.module}.{mapper}.")),
                *self._import_statements(),
                class_def,
            ],
            type_ignores=[],
        )
        self._module = ast.fix_missing_locations(module)

        logger.info(
            "Generated {name}: {generated} method(s), {skipped} skipped",
            name=self.class_name,
            generated=len(self.generated_methods),
            skipped=len(self.skipped_methods),
        )
        return self._module

    def render(self) -> str:
        """Return the source text of the generated module."""
        return f"# {self.config.header_comment}\n{ast.unparse(self.generate())}\n"

    def _init_method(self) -> ast.FunctionDef:
        context = self.config.context_attribute
        body: list[ast.stmt] = [_assign_self(context, codegen.name("context"))]

        for simple in self._simple_fields:
            implementation = codegen.type_expression(simple.dao_implementation)
            if simple.is_async:
                construction = codegen.call(
                    codegen.attribute(implementation, "init_async"), codegen.name("context")
                )
                value: ast.expr = codegen.call(
                    codegen.name("AsyncLazyReference"), codegen.lambda_([], construction)
                )
            else:
                value = codegen.call(
                    codegen.attribute(implementation, "init"), codegen.name("context")
                )
            body.append(_assign_self(simple.name, value))

        for mapping in self._map_fields:
            body.append(_assign_self(mapping.name, codegen.call(codegen.name("DaoCache"))))

        return codegen.function_def(
            "__init__",
            codegen.arguments("self", "context", annotations=[None, codegen.name("MapperContext")]),
            body,
            returns=ast.Constant(value=None),
        )

    def _require(self, type_ref: TypeRef) -> None:
        if type_ref.is_builtin or not type_ref.is_class:
            return
        if "<locals>" in type_ref.qualname:
            raise ScanError(
                self.declaration.mapper.qualname,
                f"{type_ref.qualname} is defined inside a function and cannot be imported",
            )
        name = type_ref.import_name
        for module, names in self._imports.items():
            if name in names and module != type_ref.module:
                raise ScanError(
                    self.declaration.mapper.qualname,
                    f"name {name!r} is imported from both {module} and {type_ref.module}",
                )
        self._imports[type_ref.module].add(name)

    def _require_runtime(self, *names: str) -> None:
        self._imports[RUNTIME_MODULE].update(names)

    def _import_statements(self) -> list[ast.stmt]:
        return [
            ast.ImportFrom(
                module=module,
                names=[ast.alias(name=n) for n in sorted(self._imports[module])],
                level=0,
            )
            for module in sorted(self._imports)
        ]


def _assign_self(attr: str, value: ast.expr) -> ast.Assign:
    target = ast.Attribute(value=codegen.name("self"), attr=attr, ctx=ast.Store())
    return ast.Assign(targets=[target], value=value, type_comment=None)


def generate_mapper_source(
    mapper: type,
    report: DiagnosticReport | None = None,
    config: GeneratorConfig | None = None,
) -> str:
    """Scan ``mapper`` and render its implementation module.

    Problems are collected in ``report``; the returned source contains every
    method that could be generated.
    """
    report = report if report is not None else DiagnosticReport()
    declaration = scan_mapper(mapper, report)
    return MapperImplementationGenerator(declaration, report, config).render()
