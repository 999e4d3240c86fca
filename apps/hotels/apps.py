from django.apps import AppConfig


class HotelsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.hotels"
    label = "hotels"

    def ready(self):
        from . import signals  # noqa: F401
