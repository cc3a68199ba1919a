"""Test settings for pytest.

Uses SQLite for speed and to avoid requiring PostgreSQL during tests.
Background extraction runs inline so tests observe its effects.
"""

from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

URL_CACHE = {
    **URL_CACHE,  # noqa: F405
    "EXTRACTION_EAGER": True,
    "EXTRACTOR": "url_cache.extractors.html.HtmlMetadataExtractor",
}
