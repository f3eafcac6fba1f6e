VERSION = (1, 0, 0)
__version__ = ".".join(map(str, VERSION))


def get_store(alias, facade=None):
    """Helper used for obtaining a single configured store.

    Uses the shared facade built from ``MULTICACHE_STORES`` when none is given.
    """
    from django_multicache.facade import default_facade

    if facade is None:
        facade = default_facade()
    return facade.get_store(alias)
