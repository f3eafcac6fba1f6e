"""Key-value stores for Redis-compatible servers.

Architecture:
- KeyValueStore: all logic, library-agnostic
- RedisStore: sets class attributes for redis-py
- ValkeyStore: sets class attributes for valkey-py

``LOCATION`` is a server URL (``redis://host:port/db``); every option that
is not a store option is passed to ``from_url``.
"""

from __future__ import annotations

from typing import Any

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from django_multicache.exceptions import StoreWriteError
from django_multicache.omit_exception import omit_exception
from django_multicache.stores.base import BaseStore
from django_multicache.types import MISSING

try:
    import valkey
    from valkey.exceptions import ConnectionError as ValkeyConnectionError
    from valkey.exceptions import TimeoutError as ValkeyTimeoutError
    from valkey.exceptions import ValkeyError

    _VALKEY_AVAILABLE = True
except ImportError:
    _VALKEY_AVAILABLE = False

DEFAULT_LOCATION = "redis://localhost:6379"


class KeyValueStore(BaseStore):
    """Store over a Redis-protocol client.

    Subclasses must set:
    - _client_class: The client class (e.g., redis.Redis)
    - _connection_errors / _backend_errors: The library's exception types
    """

    _client_class: Any = None

    def _connect(self) -> Any:
        return self._client_class.from_url(self.location or DEFAULT_LOCATION, **self._options)

    def _disconnect(self, client: Any) -> None:
        client.close()

    @omit_exception(error_class=StoreWriteError)
    def put(self, key: str, value: Any) -> None:
        self._client.set(key, self.encode(value))

    @omit_exception(return_value=MISSING)
    def get(self, key: str) -> Any:
        data = self._client.get(key)
        if data is None:
            return MISSING
        return self.decode(data)

    @omit_exception(return_value=False)
    def delete(self, key: str) -> bool:
        return bool(self._client.delete(key))


class RedisStore(KeyValueStore):
    """Redis store using redis-py."""

    _client_class = redis.Redis
    _connection_errors = (RedisConnectionError, RedisTimeoutError)
    _backend_errors = (RedisError,)


if _VALKEY_AVAILABLE:

    class ValkeyStore(KeyValueStore):
        """Valkey store using valkey-py."""

        _client_class = valkey.Valkey
        _connection_errors = (ValkeyConnectionError, ValkeyTimeoutError)
        _backend_errors = (ValkeyError,)

else:

    class ValkeyStore(KeyValueStore):  # type: ignore[no-redef]
        """Valkey store (requires valkey-py)."""

        def __init__(self, *args: Any, **kwargs: Any) -> None:
            raise ImportError("ValkeyStore requires valkey-py. Install with: pip install valkey")
