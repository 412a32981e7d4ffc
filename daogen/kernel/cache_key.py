"""Cache key identifying one DAO instance in a keyed mapper cache."""

from __future__ import annotations

from dataclasses import dataclass

from daogen.kernel.identifier import Identifier, to_identifier


@dataclass(frozen=True, slots=True, init=False)
class DaoCacheKey:
    """A ``(keyspace_id, table_id)`` pair, each side independently absent.

    ``None`` marks an absent side and is distinct from every identifier.
    Text arguments are parsed with CQL rules, so ``DaoCacheKey("ks1", None)``
    equals ``DaoCacheKey(Identifier.from_cql("ks1"), None)``.

    Examples
    --------
    >>> DaoCacheKey("ks1", None) == DaoCacheKey(Identifier.from_internal("ks1"), None)
    True
    >>> DaoCacheKey("ks1", None) == DaoCacheKey(None, "ks1")
    False
    """

    keyspace_id: Identifier | None
    table_id: Identifier | None

    def __init__(
        self,
        keyspace: str | Identifier | None,
        table: str | Identifier | None,
    ) -> None:
        object.__setattr__(self, "keyspace_id", to_identifier(keyspace))
        object.__setattr__(self, "table_id", to_identifier(table))
