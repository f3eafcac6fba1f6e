"""Django model for the PostgreSQL store table.

The initial migration creates the table itself, as UNLOGGED on PostgreSQL.

The ``LOCATION`` of a ``PostgreSQLStore`` must match ``db_table``
(default ``"multicache"``).
"""

from __future__ import annotations

from django.db import models


class StoreEntry(models.Model):
    """One cached value, kept as JSON text."""

    key = models.TextField(primary_key=True)
    value = models.TextField()

    class Meta:
        db_table = "multicache"

    def __str__(self) -> str:
        return self.key
