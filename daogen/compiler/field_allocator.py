"""Allocation of storage fields in generated mapper classes."""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from daogen.compiler.signature import TypeRef

_INVALID_CHARS = re.compile(r"\W")


class FieldAllocator(Protocol):
    """Adds DAO storage fields to the class being generated.

    Both methods return a field name that is unique within that class; it may
    differ from the suggestion.
    """

    def add_dao_simple_field(
        self,
        suggested_name: str,
        value_type: TypeRef,
        dao_implementation: TypeRef,
        is_async: bool,
    ) -> str:
        """Add a field holding the single DAO of a method without overrides."""
        ...

    def add_dao_map_field(self, suggested_name: str, value_type: TypeRef) -> str:
        """Add a field holding a key-to-DAO cache."""
        ...


@dataclass(frozen=True, slots=True)
class DaoSimpleField:
    """Field initialised with the one DAO instance of a method.

    Sync fields hold the instance itself; async fields hold an
    ``AsyncLazyReference`` that builds it on first await.
    """

    name: str
    value_type: TypeRef
    dao_implementation: TypeRef
    is_async: bool


@dataclass(frozen=True, slots=True)
class DaoMapField:
    """Field holding a ``DaoCache`` keyed by ``DaoCacheKey``."""

    name: str
    value_type: TypeRef


class NameIndex:
    """Hands out attribute names that are unique within one generated class.

    Collisions get a numeric suffix: ``product_dao_cache``,
    ``product_dao_cache_2``, ``product_dao_cache_3``...
    """

    __slots__ = ("_used",)

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self._used: set[str] = set(reserved)

    def unique_field(self, suggested_name: str) -> str:
        base = _sanitize(suggested_name)
        candidate = base
        counter = 2
        while candidate in self._used:
            candidate = f"{base}_{counter}"
            counter += 1
        self._used.add(candidate)
        return candidate


def _sanitize(name: str) -> str:
    cleaned = _INVALID_CHARS.sub("_", name) or "field"
    if cleaned[0].isdigit():
        cleaned = f"_{cleaned}"
    if keyword.iskeyword(cleaned):
        cleaned = f"{cleaned}_"
    return cleaned
