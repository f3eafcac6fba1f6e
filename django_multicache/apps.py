from django.apps import AppConfig


class MulticacheConfig(AppConfig):
    """Django app configuration registering the ``multicache_demo`` command."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_multicache"
    label = "django_multicache"
    verbose_name = "django-multicache"
