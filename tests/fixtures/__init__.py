"""Test fixtures for django-multicache."""

from tests.fixtures.containers import (
    ContainerInfo,
    docker_available,
    memcached_container,
    mongo_container,
    pg_database,
    redis_container,
)

__all__ = [
    "ContainerInfo",
    "docker_available",
    "memcached_container",
    "mongo_container",
    "pg_database",
    "redis_container",
]
