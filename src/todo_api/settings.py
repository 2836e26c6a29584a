from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'mongo' (default) or 'memory'
    - MONGO_URI: connection string. Default 'mongodb://localhost:27017'
    - MONGO_DB_NAME: database name. Default 'demo_todo'
    - MONGO_COLLECTION: collection holding todos. Default 'todo'
    - MONGO_CONNECT_TIMEOUT_SECONDS: startup ping deadline. Default 10
    - HOST / PORT: listener address. Default 0.0.0.0:9000
    - SHUTDOWN_GRACE_SECONDS: time given to in-flight requests on shutdown. Default 30
    - HOME_FILE: static file served at '/'. Default './README.md'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - LOG_LEVEL: logging level name. Default 'INFO'
    """

    persistence_backend: str
    mongo_uri: str
    mongo_db_name: str
    mongo_collection: str
    mongo_connect_timeout_seconds: float
    host: str
    port: int
    shutdown_grace_seconds: int
    home_file: str
    cors_allow_origins: List[str]
    log_level: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_float(value: str, default: float) -> float:
    try:
        return float(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "mongo").strip().lower()
    if backend not in {"memory", "mongo"}:
        backend = "mongo"

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        persistence_backend=backend,
        mongo_uri=_get_env("MONGO_URI", "mongodb://localhost:27017").strip(),
        mongo_db_name=_get_env("MONGO_DB_NAME", "demo_todo").strip(),
        mongo_collection=_get_env("MONGO_COLLECTION", "todo").strip(),
        mongo_connect_timeout_seconds=_parse_float(_get_env("MONGO_CONNECT_TIMEOUT_SECONDS", "10"), 10.0),
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_int(_get_env("PORT", "9000"), 9000),
        shutdown_grace_seconds=_parse_int(_get_env("SHUTDOWN_GRACE_SECONDS", "30"), 30),
        home_file=_get_env("HOME_FILE", "./README.md").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        log_level=log_level,
    )
