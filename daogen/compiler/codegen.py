"""Small builders for the ``ast`` nodes that make up generated code."""

from __future__ import annotations

import ast
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from daogen.compiler.signature import MethodSignature, TypeRef

AWAITABLE_NAME = "Awaitable"


def name(identifier: str) -> ast.Name:
    return ast.Name(id=identifier, ctx=ast.Load())


def attribute(value: ast.expr, attr: str) -> ast.Attribute:
    return ast.Attribute(value=value, attr=attr, ctx=ast.Load())


def self_attribute(attr: str) -> ast.Attribute:
    """``self.<attr>``."""
    return attribute(name("self"), attr)


def call(func: ast.expr, *args: ast.expr) -> ast.Call:
    return ast.Call(func=func, args=list(args), keywords=[])


def arguments(
    *names: str,
    annotations: Sequence[ast.expr | None] = (),
    defaults: Sequence[ast.expr] = (),
) -> ast.arguments:
    """Positional parameters, optionally annotated.

    ``defaults`` apply to the trailing parameters.
    """
    padded = list(annotations) + [None] * (len(names) - len(annotations))
    return ast.arguments(
        posonlyargs=[],
        args=[ast.arg(arg=n, annotation=a) for n, a in zip(names, padded, strict=True)],
        vararg=None,
        kwonlyargs=[],
        kw_defaults=[],
        kwarg=None,
        defaults=list(defaults),
    )


def lambda_(params: Sequence[str], body: ast.expr) -> ast.Lambda:
    return ast.Lambda(args=arguments(*params), body=body)


def type_expression(type_ref: TypeRef) -> ast.expr:
    """Expression naming ``type_ref`` once its top-level name is imported."""
    first, *rest = type_ref.qualname.split(".")
    expr: ast.expr = name(first)
    for part in rest:
        expr = attribute(expr, part)
    return expr


def function_def(
    function_name: str,
    args: ast.arguments,
    body: list[ast.stmt],
    returns: ast.expr | None = None,
) -> ast.FunctionDef:
    return ast.FunctionDef(
        name=function_name,
        args=args,
        body=body,
        decorator_list=[],
        returns=returns,
        type_comment=None,
        type_params=[],
    )


def override(signature: MethodSignature, body: list[ast.stmt]) -> ast.FunctionDef:
    """Method with the same name, parameters and annotations as ``signature``."""
    param_names = ["self", *(p.name for p in signature.parameters)]
    annotations = [None, *(type_expression(p.annotation) for p in signature.parameters)]
    defaults = [ast.Constant(value=p.default) for p in signature.parameters if p.has_default]
    returns = type_expression(signature.return_type)
    if signature.is_async:
        returns = ast.Subscript(value=name(AWAITABLE_NAME), slice=returns, ctx=ast.Load())
    args = arguments(*param_names, annotations=annotations, defaults=defaults)
    return function_def(signature.name, args, body, returns)
