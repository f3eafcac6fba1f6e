from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

from django_multicache.exceptions import StoreConnectionError, StoreError, StoreReadError


def omit_exception(
    method: Callable | None = None,
    *,
    error_class: type[StoreError] = StoreReadError,
    return_value: Any | None = None,
) -> Callable:
    """Decorator that translates backend errors and ignores them if configured.

    When applied to a store method, this decorator catches the errors the
    store's client library raises and turns them into the facade's taxonomy:
    ``self._connection_errors`` become :class:`StoreConnectionError`, and
    ``self._backend_errors`` become ``error_class``. If the store was built
    with ``ignore_exceptions`` the translated error is logged and
    ``return_value`` is returned instead.

    Serializer errors are not in either tuple and always propagate.

    Args:
        method: The method to wrap (when used without parentheses)
        error_class: Error raised for non-connection backend failures
        return_value: Value to return when the exception is ignored

    Usage:
        @omit_exception(error_class=StoreWriteError)
        def put(self, key, value): ...

        @omit_exception(return_value=MISSING)
        def get(self, key): ...
    """
    if method is None:
        return functools.partial(omit_exception, error_class=error_class, return_value=return_value)

    operation = method.__name__

    def _handle_exception(self: Any, exc: Exception) -> Any:
        kind = StoreConnectionError if isinstance(exc, self._connection_errors) else error_class
        error = kind(self.alias, operation, str(exc) or type(exc).__name__)
        if self._ignore_exceptions:
            if self._log_ignored_exceptions:
                self._logger.exception("Exception ignored (%s)", error)
            return return_value
        raise error from exc

    @functools.wraps(method)
    def _decorator(self: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return method(self, *args, **kwargs)
        except self._connection_errors + self._backend_errors as e:
            return _handle_exception(self, e)

    return _decorator
