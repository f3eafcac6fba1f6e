"""Container fixtures for the external stores using testcontainers.

Each backend gets one session-scoped container. Tests that request one of
these fixtures are skipped when no Docker daemon is reachable.
"""

import time
from collections.abc import Callable, Generator
from contextlib import suppress
from typing import NamedTuple

import docker
import pytest
from pymemcache.client.base import Client as MemcacheClient
from pymongo import MongoClient
from testcontainers.core.container import DockerContainer
from testcontainers.core.waiting_utils import wait_for_logs

REDIS_IMAGE = "redis:latest"
MEMCACHED_IMAGE = "memcached:latest"
MONGO_IMAGE = "mongo:7"
PG_IMAGE = "postgres:17"

PG_DB = "multicache_test"
PG_USER = "multicache"
PG_PASS = "multicache"
PG_ALIAS = "pg_store"

READY_TIMEOUT = 30.0  # Seconds to wait for a service to accept commands
READY_INTERVAL = 0.5  # Seconds between readiness checks


class ContainerInfo(NamedTuple):
    """Container connection info plus the container object for internal operations."""

    host: str
    port: int
    container: DockerContainer


def _docker_reachable() -> bool:
    try:
        docker.from_env().ping()
    except Exception:  # noqa: BLE001
        return False
    return True


def _wait_until_ready(check: Callable[[], object], name: str, *, timeout: float = READY_TIMEOUT) -> None:
    """Call ``check`` until it stops raising.

    Some images log nothing useful when ready, so an actual round trip is the
    only reliable readiness signal.
    """
    deadline = time.monotonic() + timeout
    last_error: Exception | None = None

    while time.monotonic() < deadline:
        try:
            check()
        except Exception as e:  # noqa: BLE001
            last_error = e
        else:
            return
        time.sleep(READY_INTERVAL)

    msg = f"{name} not ready after {timeout}s"
    if last_error:
        msg += f": {last_error}"
    raise RuntimeError(msg)


def _start(image: str, port: int) -> tuple[DockerContainer, str, int]:
    container = DockerContainer(image)
    container.with_exposed_ports(port)
    container.start()
    return container, container.get_container_host_ip(), int(container.get_exposed_port(port))


@pytest.fixture(scope="session")
def docker_available() -> None:
    if not _docker_reachable():
        pytest.skip("Docker is not available")


@pytest.fixture(scope="session")
def redis_container(docker_available) -> Generator[ContainerInfo]:
    container, host, port = _start(REDIS_IMAGE, 6379)
    wait_for_logs(container, "Ready to accept connections")
    yield ContainerInfo(host, port, container)
    with suppress(Exception):
        container.stop()


@pytest.fixture(scope="session")
def memcached_container(docker_available) -> Generator[ContainerInfo]:
    container, host, port = _start(MEMCACHED_IMAGE, 11211)

    def check() -> None:
        client = MemcacheClient((host, port), connect_timeout=2, timeout=2)
        try:
            client.version()
        finally:
            client.close()

    _wait_until_ready(check, "Memcached")
    yield ContainerInfo(host, port, container)
    with suppress(Exception):
        container.stop()


@pytest.fixture(scope="session")
def mongo_container(docker_available) -> Generator[ContainerInfo]:
    container, host, port = _start(MONGO_IMAGE, 27017)

    def check() -> None:
        client = MongoClient(host, port, serverSelectionTimeoutMS=2000)
        try:
            client.admin.command("ping")
        finally:
            client.close()

    _wait_until_ready(check, "MongoDB")
    yield ContainerInfo(host, port, container)
    with suppress(Exception):
        container.stop()


@pytest.fixture(scope="session")
def pg_database(docker_available, django_db_blocker) -> Generator[str]:
    """Start PostgreSQL, register it as a Django database and migrate the store table.

    Yields the database alias.
    """
    from django.core.management import call_command
    from django.db import connections

    container = DockerContainer(PG_IMAGE)
    container.with_env("POSTGRES_DB", PG_DB)
    container.with_env("POSTGRES_USER", PG_USER)
    container.with_env("POSTGRES_PASSWORD", PG_PASS)
    container.with_exposed_ports(5432)
    container.start()
    wait_for_logs(container, "database system is ready to accept connections", timeout=30)

    connections.settings[PG_ALIAS] = {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": PG_DB,
        "USER": PG_USER,
        "PASSWORD": PG_PASS,
        "HOST": container.get_container_host_ip(),
        "PORT": str(container.get_exposed_port(5432)),
        "ATOMIC_REQUESTS": False,
        "AUTOCOMMIT": True,
        "CONN_MAX_AGE": 0,
        "CONN_HEALTH_CHECKS": False,
        "OPTIONS": {},
        "TIME_ZONE": None,
        "TEST": {
            "CHARSET": None,
            "COLLATION": None,
            "MIGRATE": True,
            "MIRROR": None,
            "NAME": None,
        },
    }

    # PostgreSQL restarts once after initdb, so the first attempts may be refused
    with django_db_blocker.unblock():
        _wait_until_ready(
            lambda: call_command("migrate", "multicache_postgres", database=PG_ALIAS, verbosity=0),
            "PostgreSQL",
        )

    yield PG_ALIAS

    with django_db_blocker.unblock():
        with suppress(AttributeError):
            connections[PG_ALIAS].close()
            delattr(connections._connections, PG_ALIAS)
    connections.settings.pop(PG_ALIAS, None)
    with suppress(Exception):
        container.stop()
