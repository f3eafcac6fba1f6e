"""Type aliases and the store protocol for django-multicache."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Final, Protocol, runtime_checkable


class StoreType(StrEnum):
    """Selectors for the five built-in stores."""

    INBUILT = "inbuilt"
    REDIS = "redis"
    MEMCACHED = "memcached"
    MONGODB = "mongodb"
    POSTGRESQL = "postgresql"


class _Missing:
    """Absence marker returned when a key is not found."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


@runtime_checkable
class StoreProtocol(Protocol):
    """Interface every store implements.

    ``get`` returns :data:`MISSING` for a key that was never written (or was
    deleted), never ``None``: ``None`` is a valid stored value.
    """

    def put(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Any: ...

    def delete(self, key: str) -> bool: ...

    def close(self) -> None: ...

    async def aput(self, key: str, value: Any) -> None: ...

    async def aget(self, key: str) -> Any: ...

    async def adelete(self, key: str) -> bool: ...

    async def aclose(self) -> None: ...
