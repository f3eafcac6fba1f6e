# Stores (one per backend) - use these as BACKEND in MULTICACHE_STORES
from django_multicache.stores.base import BaseStore
from django_multicache.stores.memcached import MemcachedStore
from django_multicache.stores.memory import MemoryStore
from django_multicache.stores.mongodb import MongoDBStore
from django_multicache.stores.postgres import PostgreSQLStore
from django_multicache.stores.redis import KeyValueStore, RedisStore, ValkeyStore

__all__ = [
    "BaseStore",
    "KeyValueStore",
    "MemcachedStore",
    "MemoryStore",
    "MongoDBStore",
    "PostgreSQLStore",
    "RedisStore",
    "ValkeyStore",
]
