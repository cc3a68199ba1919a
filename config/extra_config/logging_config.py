"""Logging configuration for Metacache.

Everything propagates to the root logger, which writes to the console and,
when ``LOG_FILE_ENABLED`` is set, to a rotating file. Per-component levels
come from the environment.
"""

import os
from pathlib import Path

from .environment import BASE_DIR, env_bool, env_int

LOG_ENABLED = env_bool("LOG_ENABLED", True)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# logger name -> env var holding its level
COMPONENT_LEVEL_VARS = {
    "django": "DJANGO_LOG_LEVEL",
    "url_cache": "URL_CACHE_LOG_LEVEL",
    "url_cache.tasks": "URL_CACHE_TASKS_LOG_LEVEL",
    "extractor": "EXTRACTOR_LOG_LEVEL",
    "core": "CORE_LOG_LEVEL",
}


def _component_loggers():
    loggers = {
        name: {"level": os.getenv(var, LOG_LEVEL).upper(), "propagate": True}
        for name, var in COMPONENT_LEVEL_VARS.items()
    }
    # SQL is noisy at INFO; keep it opt-in.
    loggers["django.db.backends"] = {
        "level": os.getenv("SQL_LOG_LEVEL", "WARNING").upper(),
        "propagate": True,
    }
    return loggers


def _handlers():
    handlers = {}
    if env_bool("LOG_CONSOLE_ENABLED", True):
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
        }

    if env_bool("LOG_FILE_ENABLED", False):
        log_dir = Path(os.getenv("LOG_DIR", str(Path(BASE_DIR) / "logs")))
        log_file = Path(os.getenv("LOG_FILE_PATH", str(log_dir / os.getenv("LOG_FILE_NAME", "metacache.log"))))
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
            "filename": str(log_file),
            "maxBytes": env_int("LOG_MAX_BYTES", 10 * 1024 * 1024),
            "backupCount": env_int("LOG_BACKUP_COUNT", 5),
            "encoding": "utf-8",
        }
    return handlers


if LOG_ENABLED:
    LOGGING_CONFIG = "logging.config.dictConfig"
    _HANDLERS = _handlers()
    LOGGING = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            # threadName tells request threads apart from extraction workers.
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(threadName)s %(name)s - %(message)s",
            },
        },
        "handlers": _HANDLERS,
        "root": {"level": LOG_LEVEL, "handlers": list(_HANDLERS)},
        "loggers": _component_loggers(),
    }
else:
    LOGGING_CONFIG = None
    LOGGING = {}


__all__ = ["LOGGING", "LOGGING_CONFIG", "LOG_ENABLED"]
