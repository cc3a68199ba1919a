"""Modularized Django settings for Metacache."""

from .environment import BASE_DIR, ROOT_DIR  # noqa: F401
from .apps_config import (  # noqa: F401
    DEFAULT_AUTO_FIELD,
    INSTALLED_APPS,
    MIDDLEWARE,
    ROOT_URLCONF,
    TEMPLATES,
    WSGI_APPLICATION,
)
from .database_config import DATABASES  # noqa: F401
from .auth_config import AUTH_PASSWORD_VALIDATORS  # noqa: F401
from .static_config import STATIC_URL, STATIC_ROOT, TEMP_DIR  # noqa: F401
from .logging_config import LOGGING, LOGGING_CONFIG, LOG_ENABLED  # noqa: F401
from .rest_framework_config import REST_FRAMEWORK  # noqa: F401
from .swagger_config import SWAGGER_SETTINGS, SWAGGER_USE_SESSION_AUTH  # noqa: F401
from .cors_config import (  # noqa: F401
    CORS_ALLOWED_ORIGINS,
    CORS_ALLOW_CREDENTIALS,
    CORS_ALLOW_HEADERS,
    CORS_URLS_REGEX,
    CSRF_TRUSTED_ORIGINS,
)
from .url_cache_config import URL_CACHE  # noqa: F401

__all__ = [
    "BASE_DIR",
    "ROOT_DIR",
    "DEFAULT_AUTO_FIELD",
    "INSTALLED_APPS",
    "MIDDLEWARE",
    "ROOT_URLCONF",
    "TEMPLATES",
    "WSGI_APPLICATION",
    "DATABASES",
    "AUTH_PASSWORD_VALIDATORS",
    "STATIC_URL",
    "STATIC_ROOT",
    "TEMP_DIR",
    "LOGGING",
    "LOGGING_CONFIG",
    "LOG_ENABLED",
    "REST_FRAMEWORK",
    "SWAGGER_SETTINGS",
    "SWAGGER_USE_SESSION_AUTH",
    "CORS_ALLOWED_ORIGINS",
    "CORS_ALLOW_CREDENTIALS",
    "CORS_ALLOW_HEADERS",
    "CORS_URLS_REGEX",
    "CSRF_TRUSTED_ORIGINS",
    "URL_CACHE",
]
