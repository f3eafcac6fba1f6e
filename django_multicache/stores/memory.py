"""Process-local store backed by a dict."""

from __future__ import annotations

import threading
from typing import Any

from django_multicache.stores.base import BaseStore
from django_multicache.types import MISSING


class MemoryStore(BaseStore):
    """In-process store, one dict per store instance.

    Values are kept as JSON text like every other store, so ``get`` hands
    back a fresh copy and mutating it never changes what is stored. A lock
    guards the dict: concurrent writers to one key leave exactly one of
    their values behind.

    ``LOCATION`` is ignored. ``close()`` drops the dict and everything in it.
    """

    _connection_errors = ()
    _backend_errors = ()

    def __init__(self, location: str = "", **options: Any) -> None:
        super().__init__(location, **options)
        self._lock = threading.Lock()

    def _connect(self) -> dict[str, str]:
        return {}

    def put(self, key: str, value: Any) -> None:
        data = self.encode(value)
        with self._lock:
            self._client[key] = data

    def get(self, key: str) -> Any:
        with self._lock:
            data = self._client.get(key)
        if data is None:
            return MISSING
        return self.decode(data)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._client.pop(key, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._client)

    def _disconnect(self, client: dict[str, str]) -> None:
        with self._lock:
            client.clear()
