"""Django app configuration for the PostgreSQL store table."""

from __future__ import annotations

from django.apps import AppConfig


class PostgresStoreConfig(AppConfig):
    name = "django_multicache.postgres"
    label = "multicache_postgres"
    verbose_name = "Django Multicache PostgreSQL"
    default_auto_field = "django.db.models.BigAutoField"
