"""Document store for MongoDB using pymongo."""

from __future__ import annotations

from typing import Any

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from django_multicache.exceptions import StoreWriteError
from django_multicache.omit_exception import omit_exception
from django_multicache.stores.base import BaseStore
from django_multicache.types import MISSING

DEFAULT_LOCATION = "mongodb://localhost:27017"
DEFAULT_DATABASE = "mydb"
DEFAULT_COLLECTION = "cache"


class MongoDBStore(BaseStore):
    """MongoDB store keeping one ``{_id: key, value: text}`` document per key.

    ``LOCATION`` is a MongoDB connection string. The ``DATABASE`` and
    ``COLLECTION`` options pick where documents live; the remaining options
    go to ``MongoClient``.

    pymongo connects in the background, so an unreachable server shows up
    as a ``StoreConnectionError`` once server selection times out on the
    first operation.
    """

    _connection_errors = (ConnectionFailure,)
    _backend_errors = (PyMongoError,)

    def __init__(self, location: str = "", **options: Any) -> None:
        self._database = options.pop("DATABASE", DEFAULT_DATABASE)
        self._collection_name = options.pop("COLLECTION", DEFAULT_COLLECTION)
        super().__init__(location, **options)

    def _connect(self) -> MongoClient:
        return MongoClient(self.location or DEFAULT_LOCATION, **self._options)

    def _disconnect(self, client: MongoClient) -> None:
        client.close()

    @property
    def _collection(self) -> Any:
        return self._client[self._database][self._collection_name]

    @omit_exception(error_class=StoreWriteError)
    def put(self, key: str, value: Any) -> None:
        self._collection.update_one({"_id": key}, {"$set": {"value": self.encode(value)}}, upsert=True)

    @omit_exception(return_value=MISSING)
    def get(self, key: str) -> Any:
        doc = self._collection.find_one({"_id": key})
        if doc is None:
            return MISSING
        return self.decode(doc["value"])

    @omit_exception(return_value=False)
    def delete(self, key: str) -> bool:
        return self._collection.delete_one({"_id": key}).deleted_count > 0
