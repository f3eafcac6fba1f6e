"""The cache facade: one entry point routing calls to one of several stores.

Each call names its store; there is no coordination between stores, no
fallback from one to another and no coherency across them. The same key in
two stores is two independent entries.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import TYPE_CHECKING, Any, Self

from django.conf import ENVIRONMENT_VARIABLE, settings
from django.core.signals import setting_changed
from django.dispatch import receiver

from django_multicache.compat import create_store
from django_multicache.exceptions import StoreClosedError, UnknownStoreError
from django_multicache.types import MISSING, StoreType

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from django_multicache.stores.base import BaseStore

logger = logging.getLogger(__name__)

# Used when neither the constructor nor MULTICACHE_STORES supply a configuration
DEFAULT_STORES: dict[str, dict[str, Any]] = {
    StoreType.INBUILT: {
        "BACKEND": "django_multicache.stores.memory.MemoryStore",
    },
    StoreType.REDIS: {
        "BACKEND": "django_multicache.stores.redis.RedisStore",
        "LOCATION": "redis://localhost:6379",
    },
    StoreType.MEMCACHED: {
        "BACKEND": "django_multicache.stores.memcached.MemcachedStore",
        "LOCATION": "localhost:11211",
    },
    StoreType.MONGODB: {
        "BACKEND": "django_multicache.stores.mongodb.MongoDBStore",
        "LOCATION": "mongodb://localhost:27017",
        "OPTIONS": {"DATABASE": "mydb", "COLLECTION": "cache"},
    },
    StoreType.POSTGRESQL: {
        "BACKEND": "django_multicache.stores.postgres.PostgreSQLStore",
        "LOCATION": "multicache",
        "OPTIONS": {"DATABASE": "default"},
    },
}


def get_stores_config() -> Mapping[str, Any]:
    """Return ``settings.MULTICACHE_STORES`` if Django is configured, else the defaults."""
    if settings.configured or os.environ.get(ENVIRONMENT_VARIABLE):
        stores = getattr(settings, "MULTICACHE_STORES", None)
        if stores is not None:
            return stores
    return DEFAULT_STORES


class CacheFacade:
    """Route ``set``/``get``/``delete`` calls to a named store.

    All stores are built at construction. None of them connects until its
    first operation, so construction succeeds even when a backend is down;
    the failure surfaces as ``StoreConnectionError`` on first use.

    After ``close()`` every operation raises ``StoreClosedError``.

    Example::

        with CacheFacade() as cache:
            cache.set("myKey", {"a": 1}, "redis")
            cache.get("myKey", "redis")  # {"a": 1}
            cache.get("otherKey", "redis")  # MISSING
    """

    def __init__(self, stores: Mapping[str, Any] | None = None) -> None:
        config = stores if stores is not None else get_stores_config()
        self._stores: dict[str, BaseStore] = {}
        for alias, params in config.items():
            alias = str(alias)
            self._stores[alias] = create_store(alias, params)
            logger.debug("Configured store %s: %r", alias, self._stores[alias])
        self._closed = False

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<{self.__class__.__name__} stores={list(self._stores)} {state}>"

    @property
    def stores(self) -> tuple[str, ...]:
        """Aliases of the configured stores."""
        return tuple(self._stores)

    @property
    def closed(self) -> bool:
        return self._closed

    def _resolve(self, store: str, operation: str) -> BaseStore:
        if self._closed:
            raise StoreClosedError(operation)
        try:
            return self._stores[str(store)]
        except KeyError:
            raise UnknownStoreError(str(store), self.stores) from None

    def get_store(self, store: str) -> BaseStore:
        """Return the store behind a selector."""
        return self._resolve(store, "get_store")

    # =========================================================================
    # Core operations
    # =========================================================================

    def set(self, key: str, value: Any, store: str) -> None:
        """Serialize ``value`` to JSON text and write it to one store.

        Raises:
            SerializerError: ``value`` is not JSON serializable.
            StoreConnectionError: The backend is unreachable.
            StoreWriteError: The backend rejected the write.
        """
        self._resolve(store, "set").put(key, value)

    def get(self, key: str, store: str, default: Any = MISSING) -> Any:
        """Read ``key`` from one store, returning ``default`` when it is absent.

        ``default`` is the ``MISSING`` marker unless given, so a stored
        ``None`` and a miss can be told apart.
        """
        value = self._resolve(store, "get").get(key)
        return default if value is MISSING else value

    def delete(self, key: str, store: str) -> bool:
        """Remove ``key`` from one store. Returns True if it existed."""
        return self._resolve(store, "delete").delete(key)

    def has_key(self, key: str, store: str) -> bool:
        return self._resolve(store, "has_key").has_key(key)

    def close(self) -> None:
        """Close every store. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for alias, store in self._stores.items():
            try:
                store.close()
            except Exception:  # noqa: BLE001
                logger.warning("Error closing store %s", alias, exc_info=True)

    # =========================================================================
    # Async operations
    # =========================================================================

    async def aset(self, key: str, value: Any, store: str) -> None:
        await self._resolve(store, "set").aput(key, value)

    async def aget(self, key: str, store: str, default: Any = MISSING) -> Any:
        value = await self._resolve(store, "get").aget(key)
        return default if value is MISSING else value

    async def adelete(self, key: str, store: str) -> bool:
        return await self._resolve(store, "delete").adelete(key)

    async def ahas_key(self, key: str, store: str) -> bool:
        return await self._resolve(store, "has_key").ahas_key(key)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        for alias, store in self._stores.items():
            try:
                await store.aclose()
            except Exception:  # noqa: BLE001
                logger.warning("Error closing store %s", alias, exc_info=True)

    # =========================================================================
    # Context managers
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.aclose()


_default_facade: CacheFacade | None = None
_default_lock = threading.Lock()


def default_facade() -> CacheFacade:
    """Return the process-wide facade built from ``MULTICACHE_STORES``.

    Built on first use and reused afterwards; a closed one is replaced.
    """
    global _default_facade
    with _default_lock:
        if _default_facade is None or _default_facade.closed:
            _default_facade = CacheFacade()
        return _default_facade


@receiver(setting_changed)
def reset_default_facade(*, setting: str, **kwargs: Any) -> None:
    global _default_facade
    if setting != "MULTICACHE_STORES":
        return
    with _default_lock:
        if _default_facade is not None:
            _default_facade.close()
        _default_facade = None
