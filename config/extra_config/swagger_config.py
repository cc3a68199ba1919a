"""Swagger/OpenAPI configuration for Metacache."""

import os

from .environment import env_bool

# Staff endpoints accept Basic and session auth; the UI offers both.
SWAGGER_USE_SESSION_AUTH = env_bool("SWAGGER_USE_SESSION_AUTH", True)

SWAGGER_SETTINGS = {
    "SECURITY_DEFINITIONS": {"Basic": {"type": "basic"}},
    "USE_SESSION_AUTH": SWAGGER_USE_SESSION_AUTH,
    "LOGIN_URL": "/api-auth/login/",
    "LOGOUT_URL": "/api-auth/logout/",
    "JSON_EDITOR": True,
    # The API only reads, creates jobs and deletes entries.
    "SUPPORTED_SUBMIT_METHODS": ["get", "post", "delete"],
    "DOC_EXPANSION": "none",
    "OPERATIONS_SORTER": "alpha",
    "TAGS_SORTER": "alpha",
    "DEEP_LINKING": True,
    "DEFAULT_MODEL_RENDERING": "example",
    "VALIDATOR_URL": None if os.getenv("DJANGO_ENV", "development") == "production" else "https://validator.swagger.io/validator",
    "PERSIST_AUTH": True,
    "REFETCH_SCHEMA_WITH_AUTH": True,
    "DEFAULT_API_URL": os.getenv("SWAGGER_DEFAULT_API_URL", "http://localhost"),
    "TAGS": [
        {"name": "Metadata", "description": "Cache-aside URL metadata lookup"},
        {"name": "URL cache", "description": "Inspect and maintain the URL metadata cache (staff only)"},
        {"name": "Export", "description": "Export filtered cache entries to CSV"},
    ],
}

__all__ = ["SWAGGER_SETTINGS", "SWAGGER_USE_SESSION_AUTH"]
