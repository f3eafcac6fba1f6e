"""Write and read back one key on every store.

Usage::

    python manage.py multicache_demo
    python manage.py multicache_demo --store inbuilt --store redis --key greeting
"""

from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand

from django_multicache.exceptions import CacheFacadeError, UnknownStoreError
from django_multicache.facade import CacheFacade
from django_multicache.types import StoreType

# Store and the payload written to it, in run order
DEMO_PAYLOADS: list[tuple[str, dict[str, int]]] = [
    (StoreType.REDIS, {"a": 1}),
    (StoreType.MEMCACHED, {"b": 2}),
    (StoreType.MONGODB, {"c": 3}),
    (StoreType.POSTGRESQL, {"d": 4}),
    (StoreType.INBUILT, {"e": 5}),
]


class Command(BaseCommand):
    help = "Set a key on each configured store, read it back and print the result."

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument("--key", default="myKey", help="Key to write (default: myKey)")
        parser.add_argument(
            "--store",
            action="append",
            dest="stores",
            choices=[alias for alias, _ in DEMO_PAYLOADS],
            metavar="ALIAS",
            help="Only run against this store; repeat for several",
        )

    def handle(self, *args: Any, **options: Any) -> None:
        key = options["key"]
        payloads = DEMO_PAYLOADS
        if options["stores"]:
            payloads = [(alias, value) for alias, value in payloads if alias in options["stores"]]

        failures = 0
        with CacheFacade() as cache:
            for alias, value in payloads:
                try:
                    cache.set(key, value, alias)
                    result = cache.get(key, alias)
                except (CacheFacadeError, UnknownStoreError) as e:
                    failures += 1
                    self.stderr.write(f"{alias}: {e}")
                    continue
                self.stdout.write(f"{alias}: {result!r}")

        if failures:
            self.stderr.write(self.style.WARNING(f"{failures} of {len(payloads)} stores failed"))
