"""daogen: generates cached DAO factory methods for mapper interfaces.

Declare a mapper as an abstract class whose abstract methods return DAOs,
optionally narrowed by keyspace and table override parameters, then let the
compiler write its implementation.
"""

try:
    from importlib.metadata import version

    __version__ = version("daogen")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from daogen.kernel import (
    AsyncLazyReference,
    DaoCache,
    DaoCacheKey,
    DaoKeyspace,
    DaoTable,
    Identifier,
    MapperContext,
    ParameterRole,
    implemented_by,
)

__all__ = [
    "AsyncLazyReference",
    "DaoCache",
    "DaoCacheKey",
    "DaoKeyspace",
    "DaoTable",
    "Identifier",
    "MapperContext",
    "ParameterRole",
    "implemented_by",
]
