"""
Runtime settings read from environment variables.

Settings are loaded once and passed explicitly to `create_app` (see
`api/main.py`); components receive the values they need instead of reading
the environment on their own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_ENVIRONMENT = "development"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_LOG_LEVEL = "info"
DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


def load_settings() -> Settings:
    # APP_ENV wins; NODE_ENV is honoured for deployments that still set it.
    environment = _env_str("APP_ENV", "") or _env_str("NODE_ENV", DEFAULT_ENVIRONMENT)
    return Settings(
        environment=environment,
        host=_env_str("HOST", DEFAULT_HOST),
        port=_env_int("PORT", DEFAULT_PORT),
        log_level=_env_str("LOG_LEVEL", DEFAULT_LOG_LEVEL).lower(),
        cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
    )
