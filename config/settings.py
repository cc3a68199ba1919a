"""Django settings entry point for Metacache using modular extra_config package."""

import os

from .extra_config import BASE_DIR, ROOT_DIR  # noqa: F401
from .extra_config import *  # noqa: F401,F403
from .extra_config.environment import env_bool, env_list

SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-placeholder")
DEBUG = env_bool("DJANGO_DEBUG", env_bool("DEBUG", False))
ALLOWED_HOSTS = env_list("DJANGO_ALLOWED_HOSTS") or ["localhost", "127.0.0.1"]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
