from typing import Any


class BaseSerializer:
    """Base class for store value serializers.

    Stores keep values as text, so ``dumps`` returns ``str`` and ``loads``
    accepts whatever the backend hands back (``str``, or ``bytes`` from the
    key-value stores). Any object with ``dumps`` and ``loads`` methods works
    as a serializer; subclassing is not required.

    Serializers accept ``**kwargs`` for configuration. ``create_serializer()``
    in ``django_multicache.compat`` passes nothing by default.
    """

    def __init__(self, **kwargs: Any) -> None:
        pass

    def dumps(self, obj: Any) -> str:
        raise NotImplementedError

    def loads(self, data: str | bytes) -> Any:
        raise NotImplementedError
