"""Kernel of daogen: identifiers, mapper context, caches and markers.

Everything generated code needs at run time lives here. The compiler only
refers to these names; it never calls them.
"""

from daogen.kernel.cache_key import DaoCacheKey
from daogen.kernel.context import MapperContext
from daogen.kernel.identifier import Identifier
from daogen.kernel.markers import DaoKeyspace, DaoTable, ParameterRole, implemented_by
from daogen.kernel.utils.caching import AsyncLazyReference, DaoCache

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
