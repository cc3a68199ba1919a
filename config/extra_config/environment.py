"""Environment loading and env-var helpers shared by the settings modules."""

import os
from pathlib import Path
from typing import Iterable, Tuple

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ROOT_DIR = BASE_DIR

# Later files override earlier ones; .env.local is ignored inside containers.
ENV_FILES: Iterable[Tuple[Path, bool]] = (
    (ROOT_DIR / ".env", False),
    (ROOT_DIR / ".env.local", True),
)

_TRUE_VALUES = {"1", "true", "yes", "on"}

for env_file, override in ENV_FILES:
    if env_file.name == ".env.local" and os.getenv("IS_DOCKER"):
        continue
    if env_file.exists():
        load_dotenv(env_file, override=override)


def env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def env_list(name: str, default: str = "") -> list:
    raw = os.getenv(name, default)
    return [item for item in (value.strip() for value in raw.replace(",", " ").split()) if item]


__all__ = ["BASE_DIR", "ROOT_DIR"]
