"""Selection of the caching strategy of a factory method."""

from enum import StrEnum


class CachingMode(StrEnum):
    """How a generated factory method stores its DAOs.

    SIMPLE methods take no override and always return one instance held in a
    plain field. KEYED methods build one instance per distinct cache key and
    hold them in a ``DaoCache``.
    """

    SIMPLE = "simple"
    KEYED = "keyed"


def select_caching_mode(keyspace_param: str | None, table_param: str | None) -> CachingMode:
    """Return KEYED as soon as one override parameter is declared."""
    if keyspace_param is None and table_param is None:
        return CachingMode.SIMPLE
    return CachingMode.KEYED
