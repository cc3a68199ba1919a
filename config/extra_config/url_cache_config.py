"""URL metadata cache configuration for Metacache.

Read through ``url_cache.conf``; every key can be overridden from the
environment.
"""

import os

from .environment import env_bool, env_int

URL_CACHE = {
    "DEFAULT_DURATION_DAYS": env_int("URL_CACHE_DEFAULT_DURATION_DAYS", 7),
    "PREMIUM_DURATION_DAYS": env_int("URL_CACHE_PREMIUM_DURATION_DAYS", 30),
    "POPULAR_EXTENSION_WINDOW_DAYS": env_int("URL_CACHE_POPULAR_WINDOW_DAYS", 14),
    "MAX_CACHE_SIZE": env_int("URL_CACHE_MAX_SIZE", 100_000),
    "POPULARITY_THRESHOLD": env_int("URL_CACHE_POPULARITY_THRESHOLD", 10),
    "EXTRACTOR": os.getenv(
        "URL_CACHE_EXTRACTOR",
        "url_cache.extractors.html.HtmlMetadataExtractor",
    ),
    "EXTRACTION_WORKERS": env_int("URL_CACHE_EXTRACTION_WORKERS", 4),
    "EXTRACTION_EAGER": env_bool("URL_CACHE_EXTRACTION_EAGER", False),
    "EXTRACTION_TIMEOUT": env_int("URL_CACHE_EXTRACTION_TIMEOUT", 15),
    "USER_AGENT": os.getenv(
        "URL_CACHE_USER_AGENT",
        "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:126.0) Gecko/20100101 Firefox/126.0",
    ),
}

__all__ = ["URL_CACHE"]
