"""Emission of generated factory method bodies.

A SIMPLE method returns its field::

    return self.product_dao_cache

A KEYED method builds the cache key, substituting ``None`` for every override
it does not declare, then gets or creates the DAO for that key::

    key = DaoCacheKey(keyspace, None)
    return self.product_dao_cache.compute_if_absent(
        key,
        lambda k: ProductDao.init(
            self.context.with_keyspace_and_table(k.keyspace_id, k.table_id)
        ),
    )

Async methods call ``init_async`` through ``compute_if_absent_async`` instead.
"""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

from daogen.compiler import codegen
from daogen.compiler.caching_strategy import CachingMode

if TYPE_CHECKING:
    from daogen.compiler.signature import TypeRef

CACHE_KEY_NAME = "DaoCacheKey"
"""Runtime name every KEYED body refers to."""

_KEY_VARIABLE = "key"
_LAMBDA_PARAMETER = "k"


def emit_body(
    mode: CachingMode,
    field_name: str,
    dao_implementation: TypeRef,
    is_async: bool,
    keyspace_arg: str | None = None,
    table_arg: str | None = None,
    context_attribute: str = "context",
) -> list[ast.stmt]:
    """Return the statements of a factory method body."""
    if mode is CachingMode.SIMPLE:
        return emit_simple_body(field_name)
    return emit_keyed_body(
        field_name,
        dao_implementation,
        is_async,
        keyspace_arg,
        table_arg,
        context_attribute,
    )


def emit_simple_body(field_name: str) -> list[ast.stmt]:
    return [ast.Return(value=codegen.self_attribute(field_name))]


def emit_keyed_body(
    field_name: str,
    dao_implementation: TypeRef,
    is_async: bool,
    keyspace_arg: str | None,
    table_arg: str | None,
    context_attribute: str = "context",
) -> list[ast.stmt]:
    key_variable = _key_variable(keyspace_arg, table_arg)

    # key = DaoCacheKey(x, y) where x, y is a parameter name or None
    build_key = ast.Assign(
        targets=[ast.Name(id=key_variable, ctx=ast.Store())],
        value=codegen.call(
            codegen.name(CACHE_KEY_NAME),
            _argument_or_none(keyspace_arg),
            _argument_or_none(table_arg),
        ),
        type_comment=None,
    )

    k = codegen.name(_LAMBDA_PARAMETER)
    child_context = codegen.call(
        codegen.attribute(codegen.self_attribute(context_attribute), "with_keyspace_and_table"),
        codegen.attribute(k, "keyspace_id"),
        codegen.attribute(k, "table_id"),
    )
    construction = codegen.call(
        codegen.attribute(
            codegen.type_expression(dao_implementation), "init_async" if is_async else "init"
        ),
        child_context,
    )
    get_or_create = codegen.call(
        codegen.attribute(
            codegen.self_attribute(field_name),
            "compute_if_absent_async" if is_async else "compute_if_absent",
        ),
        codegen.name(key_variable),
        codegen.lambda_([_LAMBDA_PARAMETER], construction),
    )
    return [build_key, ast.Return(value=get_or_create)]


def _argument_or_none(argument: str | None) -> ast.expr:
    if argument is None:
        return ast.Constant(value=None)
    return codegen.name(argument)


def _key_variable(*arguments: str | None) -> str:
    # Must not shadow a parameter that the key is built from
    variable = _KEY_VARIABLE
    while variable in arguments:
        variable += "_"
    return variable
