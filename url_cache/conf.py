from datetime import timedelta
from typing import Any

from django.conf import settings

_DEFAULTS = {
    "DEFAULT_DURATION_DAYS": 7,
    "PREMIUM_DURATION_DAYS": 30,
    "POPULAR_EXTENSION_WINDOW_DAYS": 14,
    "MAX_CACHE_SIZE": 100_000,
    "POPULARITY_THRESHOLD": 10,
    "EXTRACTOR": "url_cache.extractors.html.HtmlMetadataExtractor",
    "EXTRACTION_WORKERS": 4,
    "EXTRACTION_EAGER": False,
    "EXTRACTION_TIMEOUT": 15,
    "USER_AGENT": "Mozilla/5.0 (compatible; MetacacheBot/1.0)",
}


def get_setting(name: str) -> Any:
    overrides = getattr(settings, "URL_CACHE", None) or {}
    return overrides.get(name, _DEFAULTS[name])


def default_duration() -> timedelta:
    return timedelta(days=get_setting("DEFAULT_DURATION_DAYS"))


def premium_duration() -> timedelta:
    return timedelta(days=get_setting("PREMIUM_DURATION_DAYS"))


def popular_extension_window() -> timedelta:
    return timedelta(days=get_setting("POPULAR_EXTENSION_WINDOW_DAYS"))


def max_cache_size() -> int:
    return int(get_setting("MAX_CACHE_SIZE"))


def popularity_threshold() -> int:
    return int(get_setting("POPULARITY_THRESHOLD"))
