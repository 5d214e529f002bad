"""
Centralized configuration for structmap.

- Frozen dataclass, loaded from OS env.
- Parses a .env file from the working directory via python-dotenv when present.
- Validation in __post_init__.
- Immutable singleton via functools.lru_cache.
"""

from __future__ import annotations

import functools
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "STRUCTMAP_"


# ------------------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------------------
def _load_dotenv(env_path: Path) -> None:
    if env_path.exists():
        load_dotenv(dotenv_path=str(env_path), override=False)


def _get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(ENV_PREFIX + key, default)


def _get_env_bool(key: str, default: bool = False) -> bool:
    v = os.getenv(ENV_PREFIX + key)
    if v is None:
        return default
    v = v.strip().lower()
    return v in {"1", "true", "t", "yes", "y", "on"}


# ------------------------------------------------------------------------------
# Settings dataclass (immutable)
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class MapperSettings:
    # Observability
    log_level: str = "INFO"
    json_logs: bool = False
    trace: bool = False  # debug event per field decision

    # Introspection
    cache_fields: bool = True

    def __post_init__(self) -> None:
        if not re.fullmatch(r"(?i)DEBUG|INFO|WARNING|ERROR|CRITICAL", self.log_level.strip()):
            raise ValueError("STRUCTMAP_LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        object.__setattr__(self, "log_level", self.log_level.strip().upper())

    def safe_dict(self) -> dict:
        return {
            "log_level": self.log_level,
            "json_logs": self.json_logs,
            "trace": self.trace,
            "cache_fields": self.cache_fields,
        }


# ------------------------------------------------------------------------------
# Loader (singleton)
# ------------------------------------------------------------------------------
@functools.lru_cache(maxsize=1)
def get_settings() -> MapperSettings:
    _load_dotenv(Path.cwd() / ".env")

    return MapperSettings(
        log_level=_get_env_str("LOG_LEVEL", "INFO") or "INFO",
        json_logs=_get_env_bool("JSON_LOGS", False),
        trace=_get_env_bool("TRACE", False),
        cache_fields=_get_env_bool("CACHE_FIELDS", True),
    )
