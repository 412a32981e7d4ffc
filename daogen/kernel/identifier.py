"""CQL identifiers (keyspace, table and column names).

An identifier has two textual forms. The *internal* form is the exact name as
stored by the server. The *CQL* form is the way it appears in a query:
unquoted names are case-insensitive and fold to lower case, while double-quoted
names are case-sensitive.

Examples
--------
>>> Identifier.from_cql("Inventory") == Identifier.from_internal("inventory")
True
>>> Identifier.from_cql('"Inventory"').as_internal()
'Inventory'
>>> Identifier.from_internal("Inventory").as_cql()
'"Inventory"'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from daogen.kernel.exceptions import ValidationError

_UNQUOTED_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$")

# Reserved CQL keywords; as names they must be double-quoted
RESERVED_KEYWORDS = frozenset({
    "add", "allow", "alter", "and", "apply", "asc", "authorize", "batch", "begin", "by",
    "columnfamily", "create", "default", "delete", "desc", "describe", "drop", "entries",
    "execute", "from", "full", "grant", "if", "in", "index", "infinity", "insert", "into",
    "is", "keyspace", "limit", "materialized", "mbean", "mbeans", "modify", "nan",
    "norecursive", "not", "null", "of", "on", "or", "order", "primary", "rename", "replace",
    "revoke", "schema", "select", "set", "table", "to", "token", "truncate", "unlogged",
    "unset", "update", "use", "using", "view", "where", "with",
})  # fmt: skip


def _is_double_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == '"' and text[-1] == '"'


def _needs_quotes(internal: str) -> bool:
    return internal in RESERVED_KEYWORDS or not _UNQUOTED_PATTERN.match(internal)


@dataclass(frozen=True, slots=True)
class Identifier:
    """A keyspace or table name, compared by its internal form."""

    internal: str

    @classmethod
    def from_cql(cls, cql: str) -> Identifier:
        """Build an identifier from its CQL form.

        Raises
        ------
        ValidationError
            If ``cql`` is unquoted but is a reserved keyword or contains
            characters that need quoting
        """
        if _is_double_quoted(cql):
            return cls(cql[1:-1].replace('""', '"'))
        internal = cql.lower()
        if _needs_quotes(internal):
            raise ValidationError("identifier", "needs double quotes", value=cql)
        return cls(internal)

    @classmethod
    def from_internal(cls, internal: str) -> Identifier:
        """Build an identifier from its exact server-side name."""
        return cls(internal)

    def as_internal(self) -> str:
        return self.internal

    def as_cql(self, pretty: bool = False) -> str:
        """Return the CQL form.

        With ``pretty`` the name is only quoted when quoting is required,
        including for reserved keywords.
        """
        if pretty and not _needs_quotes(self.internal):
            return self.internal
        return '"' + self.internal.replace('"', '""') + '"'

    def __str__(self) -> str:
        return self.as_cql(pretty=True)


def to_identifier(value: str | Identifier | None) -> Identifier | None:
    """Convert a text or structured identifier, passing ``None`` through."""
    if value is None or isinstance(value, Identifier):
        return value
    return Identifier.from_cql(value)
