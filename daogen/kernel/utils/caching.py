"""Cache primitives backing the fields of generated mapper classes.

Generated factory methods store their DAOs in these structures. Several
threads may call the same factory method concurrently, so both primitives
guarantee that a construction call runs at most once per key.

Examples
--------
Keyed cache with get-or-compute semantics::

    from daogen.kernel.utils.caching import DaoCache

    cache: DaoCache[DaoCacheKey, InventoryDao] = DaoCache()
    dao = cache.compute_if_absent(key, lambda k: InventoryDao.init(context))

Shared awaitable for async construction::

    reference = AsyncLazyReference(lambda: InventoryDao.init_async(context))
    dao = await reference  # later awaits return the same instance
"""

from __future__ import annotations

import asyncio
import threading
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator


K = TypeVar("K")
V = TypeVar("V")


class AsyncLazyReference(Generic[V]):
    """Awaitable that starts its factory on first await and shares the result.

    The factory's awaitable is wrapped in a task the first time the reference
    is awaited. Every later await, from any coroutine, waits on that same
    task. A failed task is not restarted: all awaiters see its exception.

    The task belongs to the event loop that first awaited the reference.
    """

    __slots__ = ("_factory", "_future", "_lock")

    def __init__(self, factory: Callable[[], Awaitable[V]]) -> None:
        self._factory = factory
        self._future: asyncio.Future[V] | None = None
        self._lock = threading.Lock()

    @property
    def started(self) -> bool:
        return self._future is not None

    def _ensure_started(self) -> asyncio.Future[V]:
        with self._lock:
            if self._future is None:
                self._future = asyncio.ensure_future(self._factory())
            return self._future

    def __await__(self) -> Generator[Any, None, V]:
        return self._ensure_started().__await__()


class DaoCache(Generic[K, V]):
    """Dict-backed cache with atomic per-key get-or-compute.

    A guard lock protects only the table of per-key locks; the construction
    call runs under the lock of its own key. Callers racing on one key wait
    for the first computation and receive its result, while callers on other
    keys proceed independently. If the construction call raises, nothing is
    stored and the exception reaches the caller that ran it.

    No max-size eviction: entries live as long as the cache.

    Examples
    --------
    >>> cache: DaoCache[str, int] = DaoCache()
    >>> cache.compute_if_absent("key", lambda k: 42)
    42
    >>> cache.compute_if_absent("key", lambda k: 99)  # cached
    42
    >>> len(cache)
    1
    """

    __slots__ = ("_guard", "_locks", "_store")

    def __init__(self) -> None:
        self._store: dict[K, V] = {}
        self._locks: dict[K, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: K) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def compute_if_absent(self, key: K, factory: Callable[[K], V]) -> V:
        """Return the cached value for ``key``, computing it on first use.

        Parameters
        ----------
        key : K
            Hashable cache key.
        factory : Callable[[K], V]
            Called with ``key`` on a miss; runs at most once per key.
        """
        try:
            return self._store[key]
        except KeyError:
            pass

        with self._lock_for(key):
            try:
                return self._store[key]
            except KeyError:
                value = factory(key)
                self._store[key] = value

        # Later callers hit the store first, so the key lock is no longer needed
        with self._guard:
            self._locks.pop(key, None)
        return value

    def compute_if_absent_async(
        self, key: K, factory: Callable[[K], Awaitable[V]]
    ) -> AsyncLazyReference[V]:
        """Return the shared awaitable for ``key``, creating it on first use.

        ``factory`` is not called here: it runs when the returned reference
        is first awaited, and only for the reference that won the insert.
        """

        def create(k: K) -> AsyncLazyReference[V]:
            return AsyncLazyReference(lambda: factory(k))

        # Async caches hold references rather than values
        return self.compute_if_absent(key, create)  # type: ignore[arg-type, return-value]

    def get(self, key: K) -> V | None:
        """Return cached value or None."""
        return self._store.get(key)

    def clear(self) -> None:
        """Remove all cached entries."""
        with self._guard:
            self._store.clear()
            self._locks.clear()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
