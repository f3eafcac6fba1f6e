"""Key-value store for Memcached using pymemcache."""

from __future__ import annotations

import re
from typing import Any

from django.core.exceptions import ImproperlyConfigured
from pymemcache import HashClient
from pymemcache.exceptions import MemcacheError

from django_multicache.exceptions import StoreWriteError
from django_multicache.omit_exception import omit_exception
from django_multicache.stores.base import BaseStore
from django_multicache.types import MISSING

DEFAULT_LOCATION = "localhost:11211"
DEFAULT_PORT = 11211


def parse_servers(location: str) -> list[tuple[str, int]]:
    """Split ``host:port`` entries separated by ``;`` or ``,``."""
    servers = []
    for entry in re.split("[;,]", location):
        entry = entry.strip()
        if not entry:
            continue
        host, sep, port = entry.rpartition(":")
        if not sep:
            host, port = entry, str(DEFAULT_PORT)
        try:
            servers.append((host, int(port)))
        except ValueError as e:
            msg = f"Invalid memcached server '{entry}'"
            raise ImproperlyConfigured(msg) from e
    return servers


class MemcachedStore(BaseStore):
    """Memcached store over ``pymemcache.HashClient``.

    ``LOCATION`` lists one or more ``host:port`` servers. Options not used
    by the store go to ``HashClient``; ``default_noreply`` is forced off
    unless set, so failed writes are reported instead of lost. ``retry_attempts``
    defaults to 0: a server that fails is dropped from the ring until
    ``dead_timeout`` passes, and calls in the meantime raise instead of
    returning an empty reply.

    Memcached only accepts keys up to 250 bytes without whitespace or
    control characters. pymemcache rejects anything else client-side.
    """

    _connection_errors = (OSError,)
    _backend_errors = (MemcacheError,)

    def __init__(self, location: str = "", **options: Any) -> None:
        super().__init__(location, **options)
        self._servers = parse_servers(self.location or DEFAULT_LOCATION)
        self._options.setdefault("default_noreply", False)
        self._options.setdefault("retry_attempts", 0)

    def _connect(self) -> HashClient:
        return HashClient(self._servers, **self._options)

    def _disconnect(self, client: HashClient) -> None:
        client.disconnect_all()

    @omit_exception(error_class=StoreWriteError)
    def put(self, key: str, value: Any) -> None:
        if not self._client.set(key, self.encode(value)):
            msg = f"Key {key!r} was not stored"
            raise MemcacheError(msg)

    @omit_exception(return_value=MISSING)
    def get(self, key: str) -> Any:
        data = self._client.get(key)
        if data is None:
            return MISSING
        return self.decode(data)

    @omit_exception(return_value=False)
    def delete(self, key: str) -> bool:
        return bool(self._client.delete(key))
