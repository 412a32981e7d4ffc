"""Names imported by generated mapper modules."""

from daogen.kernel.cache_key import DaoCacheKey
from daogen.kernel.context import MapperContext
from daogen.kernel.identifier import Identifier
from daogen.kernel.utils.caching import AsyncLazyReference, DaoCache

__all__ = ["AsyncLazyReference", "DaoCache", "DaoCacheKey", "Identifier", "MapperContext"]
