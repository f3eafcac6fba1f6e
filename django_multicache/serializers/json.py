import json
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

from django_multicache.exceptions import SerializerError
from django_multicache.serializers.base import BaseSerializer


class JSONSerializer(BaseSerializer):
    """JSON serializer using Django's DjangoJSONEncoder.

    Serializes values to JSON text, the single storage format shared by all
    stores. Limited to JSON-compatible types (strings, numbers, lists, dicts,
    bools, None), plus what DjangoJSONEncoder adds on the way in:
    - datetime, date, time objects (as ISO strings)
    - timedelta (as ISO 8601 duration)
    - Decimal and UUID (as strings)

    Those extra types come back as strings; they do not round-trip.

    Attributes:
        encoder_class: The JSON encoder class to use. Defaults to DjangoJSONEncoder.

    Example:
        Configure a store with a custom encoder::

            class MyJSONSerializer(JSONSerializer):
                encoder_class = MyEncoder

            MULTICACHE_STORES = {
                "redis": {
                    "BACKEND": "django_multicache.stores.redis.RedisStore",
                    "LOCATION": "redis://localhost:6379",
                    "OPTIONS": {"serializer": "myapp.cache.MyJSONSerializer"},
                }
            }
    """

    encoder_class = DjangoJSONEncoder

    def dumps(self, obj: Any) -> str:
        try:
            return json.dumps(obj, cls=self.encoder_class)
        except (TypeError, ValueError) as e:
            raise SerializerError(f"Value of type {type(obj).__name__} is not JSON serializable") from e

    def loads(self, data: str | bytes) -> Any:
        try:
            if isinstance(data, (bytes, bytearray, memoryview)):
                data = bytes(data).decode()
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            raise SerializerError("Stored value is not valid JSON") from e
