"""Mapper context handed to DAO construction calls."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from daogen.kernel.identifier import Identifier, to_identifier


@dataclass(frozen=True, slots=True)
class MapperContext:
    """Session and default keyspace/table a mapper and its DAOs operate on.

    Attributes
    ----------
    session : Any
        Opaque session object passed through to DAO implementations.
    keyspace_id : Identifier | None
        Keyspace used when a DAO does not specify one.
    table_id : Identifier | None
        Table used when a DAO does not specify one.
    custom_state : dict[str, Any]
        Arbitrary user state, available to DAO implementations.
    """

    session: Any = None
    keyspace_id: Identifier | None = None
    table_id: Identifier | None = None
    custom_state: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def create(
        cls,
        session: Any = None,
        keyspace: str | Identifier | None = None,
        table: str | Identifier | None = None,
        **custom_state: Any,
    ) -> MapperContext:
        """Build a context, parsing text keyspace and table names as CQL."""
        return cls(
            session=session,
            keyspace_id=to_identifier(keyspace),
            table_id=to_identifier(table),
            custom_state=custom_state,
        )

    def with_keyspace_and_table(
        self, keyspace_id: Identifier | None, table_id: Identifier | None
    ) -> MapperContext:
        """Narrow this context to a keyspace and table.

        A ``None`` argument keeps the value of this context. Returns ``self``
        when nothing changes.
        """
        new_keyspace = self.keyspace_id if keyspace_id is None else keyspace_id
        new_table = self.table_id if table_id is None else table_id
        if new_keyspace == self.keyspace_id and new_table == self.table_id:
            return self
        return replace(self, keyspace_id=new_keyspace, table_id=new_table)

    def get_custom_state(self, key: str, default: Any = None) -> Any:
        return self.custom_state.get(key, default)
