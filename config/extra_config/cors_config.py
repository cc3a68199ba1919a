"""CORS/CSRF configuration for the Metacache API."""

from corsheaders.defaults import default_headers

from .environment import env_list

DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS") or DEFAULT_ORIGINS
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_HEADERS = list(default_headers) + ["x-requested-with"]
# Only the API is exposed cross-origin; docs and admin pages are not.
CORS_URLS_REGEX = r"^/api/.*$"

CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS") or [
    origin.rstrip("/") for origin in CORS_ALLOWED_ORIGINS if origin.startswith("http")
]


__all__ = [
    "CORS_ALLOWED_ORIGINS",
    "CORS_ALLOW_CREDENTIALS",
    "CORS_ALLOW_HEADERS",
    "CORS_URLS_REGEX",
    "CSRF_TRUSTED_ORIGINS",
]
