"""Database configuration for Metacache."""

import os

from typing import Any, Dict

from .environment import BASE_DIR, env_int

engine = os.getenv("SQL_ENGINE", "django.db.backends.postgresql")

default_db: Dict[str, Any] = {
    "ENGINE": engine,
    "CONN_MAX_AGE": env_int("SQL_CONN_MAX_AGE", 60),
}

if "sqlite" in engine:
    default_db["NAME"] = os.getenv("SQL_DATABASE", str(BASE_DIR / "db.sqlite3"))
else:
    default_db.update(
        {
            "NAME": os.getenv("SQL_DATABASE", "metacache"),
            "USER": os.getenv("SQL_USER", "metacache"),
            "PASSWORD": os.getenv("SQL_PASSWORD", "metacache"),
            "HOST": os.getenv("SQL_HOST", "127.0.0.1"),
            "PORT": os.getenv("SQL_PORT", "5432"),
        }
    )

if "postgres" in engine:
    default_db["OPTIONS"] = {
        "options": os.getenv("SQL_OPTIONS", "-c client_encoding=UTF8"),
    }

DATABASES = {"default": default_db}

__all__ = ["DATABASES"]
