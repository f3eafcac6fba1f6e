"""Exceptions for django-multicache.

Every error raised by the facade or one of its stores derives from
:class:`CacheFacadeError`, so callers can catch the whole family at once or
pick the specific failure they care about.
"""

from __future__ import annotations


class CacheFacadeError(Exception):
    """Base class for all django-multicache errors."""


class StoreError(CacheFacadeError):
    """Raised when a backend call fails.

    Attributes:
        store: Alias (or class name) of the store that failed.
        operation: The store operation that failed (``put``, ``get``, ...).
    """

    def __init__(self, store: str, operation: str, detail: str | None = None) -> None:
        self.store = store
        self.operation = operation
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        msg = f"{self.operation} failed on store '{self.store}'"
        if self.detail:
            msg += f": {self.detail}"
        return msg

    def __str__(self) -> str:
        return self._message()


class StoreConnectionError(StoreError):
    """Raised when a backend cannot be reached or the call timed out.

    Stores connect lazily, so this surfaces on the first operation against an
    unreachable backend, never while the facade is being built.
    """


class StoreWriteError(StoreError):
    """Raised when a backend rejects or fails a write."""


class StoreReadError(StoreError):
    """Raised when a backend read or delete fails."""


class SerializerError(CacheFacadeError):
    """Raised when serialization or deserialization fails.

    This can occur when:
    - The value contains a type JSON cannot represent
    - The stored text is not valid JSON (corrupted or written by another tool)
    """


class StoreClosedError(CacheFacadeError):
    """Raised when an operation is attempted on a closed facade."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot {operation}: the cache facade is closed")


class UnknownStoreError(KeyError):
    """Raised when a store selector does not match any configured store.

    Attributes:
        name: The selector that was not found.
        available: The configured store aliases.

    Example:
        Handling a typo in the selector::

            from django_multicache.exceptions import UnknownStoreError

            try:
                cache.get("key", "reddis")
            except UnknownStoreError as e:
                logger.error("No such store %s, have %s", e.name, e.available)
    """

    def __init__(self, name: str, available: tuple[str, ...] = ()) -> None:
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        msg = f"Store '{self.name}' is not configured"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        return msg
