"""Static files and scratch directory configuration for Metacache."""

import os

from .environment import BASE_DIR

STATIC_URL = "static/"

STATIC_ROOT = os.path.join(BASE_DIR, "static")

# CSV exports are written here before being streamed back.
TEMP_DIR = os.getenv("TEMP_DIR", os.path.join(BASE_DIR, "temp"))

os.makedirs(TEMP_DIR, exist_ok=True)

__all__ = [
    "STATIC_URL",
    "STATIC_ROOT",
    "TEMP_DIR",
]
