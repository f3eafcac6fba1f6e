"""Relational store using Django's database connections.

Keeps one row per key in a two-column ``(key text primary key, value text)``
table. The table ships as an UNLOGGED table with the
``django_multicache.postgres`` app::

    INSTALLED_APPS = [
        ...,
        "django_multicache.postgres",
    ]

Then run ``manage.py migrate`` to create it. ``LOCATION`` is the table name
(default ``"multicache"``) and the ``DATABASE`` option the Django database
alias (default ``"default"``).

The SQL sticks to ``INSERT ... ON CONFLICT``, which SQLite understands as
well, so the store also runs on a SQLite database in tests.
"""

from __future__ import annotations

from typing import Any

from django.db import DatabaseError, InterfaceError, OperationalError

from django_multicache.exceptions import StoreWriteError
from django_multicache.omit_exception import omit_exception
from django_multicache.stores.base import BaseStore
from django_multicache.types import MISSING

DEFAULT_TABLE = "multicache"


class PostgreSQLStore(BaseStore):
    """PostgreSQL store on a Django database alias.

    Connections are owned by Django and are per-thread, so the store looks
    the connection up on every call instead of caching a handle.
    """

    _connection_errors = (OperationalError, InterfaceError)
    _backend_errors = (DatabaseError,)

    def __init__(self, location: str = "", **options: Any) -> None:
        self._db_alias = options.pop("DATABASE", "default")
        super().__init__(location or DEFAULT_TABLE, **options)

    # =========================================================================
    # Database helpers
    # =========================================================================

    @property
    def _conn(self) -> Any:
        """Get the Django database connection."""
        from django.db import connections

        return connections[self._db_alias]

    @property
    def _table(self) -> str:
        return self._conn.ops.quote_name(self.location)

    # =========================================================================
    # Store operations
    # =========================================================================

    @omit_exception(error_class=StoreWriteError)
    def put(self, key: str, value: Any) -> None:
        data = self.encode(value)
        with self._conn.cursor() as cursor:
            cursor.execute(
                f"""
                INSERT INTO {self._table} (key, value)
                VALUES (%s, %s)
                ON CONFLICT (key)
                DO UPDATE SET value = EXCLUDED.value
                """,
                [key, data],
            )

    @omit_exception(return_value=MISSING)
    def get(self, key: str) -> Any:
        with self._conn.cursor() as cursor:
            cursor.execute(f"SELECT value FROM {self._table} WHERE key = %s", [key])
            row = cursor.fetchone()
        if row is None:
            return MISSING
        return self.decode(row[0])

    @omit_exception(return_value=False)
    def delete(self, key: str) -> bool:
        with self._conn.cursor() as cursor:
            cursor.execute(f"DELETE FROM {self._table} WHERE key = %s", [key])
            return cursor.rowcount > 0

    @property
    def connected(self) -> bool:
        return self._conn.connection is not None

    def close(self) -> None:
        """Close this thread's connection for the alias."""
        self._conn.close()
