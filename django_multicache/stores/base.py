"""Base store class shared by every backend.

Architecture:
- BaseStore: serializer setup, exception settings, lazy client handle,
  async wrappers
- One subclass per backend, each mapping put/get/delete/close onto its
  client library and declaring which of that library's errors mean
  "unreachable" (``_connection_errors``) and which mean "the call failed"
  (``_backend_errors``)

Every store keeps values as JSON text, including the in-memory one.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import Any

from asgiref.sync import sync_to_async

from django_multicache.compat import create_serializer
from django_multicache.types import MISSING

logger = logging.getLogger(__name__)


def _async(method_name: str) -> Any:
    """Create an async wrapper for a sync method."""

    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        return await sync_to_async(getattr(self, method_name))(*args, **kwargs)

    wrapper.__name__ = f"a{method_name}"
    return wrapper


class BaseStore:
    """Base class for stores.

    Subclasses implement ``_connect`` (build the client handle), ``put``,
    ``get`` and ``delete``, and override ``_disconnect`` when the client
    needs an explicit shutdown call.

    The client handle is built on first use, so constructing a store never
    touches the network and always succeeds, even when the backend is down.
    """

    _connection_errors: tuple[type[BaseException], ...] = (ConnectionError, TimeoutError)
    _backend_errors: tuple[type[BaseException], ...] = ()

    def __init__(
        self,
        location: str = "",
        *,
        alias: str | None = None,
        serializer: str | type | Any | None = None,
        ignore_exceptions: bool = False,
        log_ignored_exceptions: bool = True,
        **options: Any,
    ) -> None:
        """Initialize the store.

        Args:
            location: Backend address (URL, ``host:port`` list or table name)
            alias: Name the facade knows this store by
            serializer: Serializer instance, class or import path (default JSON)
            ignore_exceptions: Log backend errors instead of raising them
            log_ignored_exceptions: Whether ignored errors are logged
            **options: Passed to the client library where the store supports it
        """
        self.location = location
        self.alias = alias or self.__class__.__name__
        self._serializer = create_serializer(serializer)
        self._options = options

        self._ignore_exceptions = ignore_exceptions
        self._log_ignored_exceptions = log_ignored_exceptions
        self._logger = logging.getLogger(self.__class__.__module__)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} alias={self.alias!r} location={self.location!r}>"

    # =========================================================================
    # Encoding/Decoding
    # =========================================================================

    def encode(self, value: Any) -> str:
        """Serialize a value to the text kept by the backend."""
        return self._serializer.dumps(value)

    def decode(self, data: str | bytes) -> Any:
        """Parse text read back from the backend."""
        return self._serializer.loads(data)

    # =========================================================================
    # Client handle
    # =========================================================================

    @cached_property
    def _client(self) -> Any:
        return self._connect()

    @property
    def connected(self) -> bool:
        """Whether the client handle has been created."""
        return "_client" in self.__dict__

    def _connect(self) -> Any:
        raise NotImplementedError

    def _disconnect(self, client: Any) -> None:
        """Release a client handle. No-op by default."""

    # =========================================================================
    # Store operations
    # =========================================================================

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        raise NotImplementedError

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``, or ``MISSING``."""
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns True if it existed."""
        raise NotImplementedError

    def has_key(self, key: str) -> bool:
        return self.get(key) is not MISSING

    def close(self) -> None:
        """Release the client handle if one was created."""
        client = self.__dict__.pop("_client", None)
        if client is None:
            return
        self._disconnect(client)
        logger.debug("Closed store %s", self.alias)

    aput = _async("put")
    aget = _async("get")
    adelete = _async("delete")
    ahas_key = _async("has_key")
    aclose = _async("close")
