import atexit

from django.apps import AppConfig


class UrlCacheConfig(AppConfig):
    name = "url_cache"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):  # type: ignore[override]
        from .tasks import shutdown

        # Queued extractions are drained on interpreter exit.
        atexit.register(shutdown)
