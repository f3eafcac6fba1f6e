"""Pytest configuration for django-multicache tests."""

import pytest

from tests.fixtures import (
    docker_available,
    memcached_container,
    mongo_container,
    pg_database,
    redis_container,
)

# Re-export fixtures so pytest can discover them
__all__ = [
    "docker_available",
    "memcached_container",
    "mongo_container",
    "pg_database",
    "redis_container",
]

MEMORY_BACKEND = "django_multicache.stores.memory.MemoryStore"


@pytest.fixture
def facade():
    """A facade over two in-memory stores, closed after the test."""
    from django_multicache.facade import CacheFacade

    cache = CacheFacade(
        {
            "inbuilt": {"BACKEND": MEMORY_BACKEND},
            "redis": {"BACKEND": MEMORY_BACKEND},
        },
    )
    yield cache
    cache.close()
