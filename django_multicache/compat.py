"""Utilities for serializer/store instantiation."""

from __future__ import annotations

from typing import Any

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

DEFAULT_SERIALIZER = "django_multicache.serializers.json.JSONSerializer"


def is_serializer_instance(obj: Any) -> bool:
    """Check if an object is a serializer instance (has dumps/loads methods)."""
    if isinstance(obj, type):
        return False
    return hasattr(obj, "dumps") and hasattr(obj, "loads") and callable(obj.dumps) and callable(obj.loads)


def is_store_instance(obj: Any) -> bool:
    """Check if an object is a store instance (has put/get/close methods)."""
    if isinstance(obj, type):
        return False
    return all(callable(getattr(obj, name, None)) for name in ("put", "get", "close"))


def create_serializer(config: str | type | Any | None, **kwargs: Any) -> Any:
    """Create a serializer instance from config.

    Args:
        config: A dotted path string, a class, an instance, or None for default JSON
        **kwargs: Keyword arguments to pass to serializer constructor
    """
    if config is None:
        config = DEFAULT_SERIALIZER

    if is_serializer_instance(config):
        return config

    if isinstance(config, type):
        return config(**kwargs)

    cls = import_string(config)
    return cls(**kwargs)


def create_store(alias: str, params: dict[str, Any]) -> Any:
    """Create a store instance from a ``MULTICACHE_STORES`` entry.

    Args:
        alias: The store alias, used for error messages and logging
        params: Dict with ``BACKEND`` and optional ``LOCATION`` / ``OPTIONS``
    """
    backend = params.get("BACKEND")
    if backend is None:
        msg = f"Store '{alias}' has no BACKEND configured"
        raise ImproperlyConfigured(msg)

    if is_store_instance(backend):
        return backend

    if isinstance(backend, str):
        try:
            backend = import_string(backend)
        except ImportError as e:
            msg = f"Could not find backend '{params['BACKEND']}' for store '{alias}': {e}"
            raise ImproperlyConfigured(msg) from e

    options = dict(params.get("OPTIONS", {}))
    return backend(params.get("LOCATION", ""), alias=alias, **options)
