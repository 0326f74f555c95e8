# app/config/settings.py
# Runtime configuration, resolved once from the environment (and .env)

import os
import re
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

STORAGE_BACKENDS = ("sql", "memory")

_DURATION_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(ms|s|m|h)?\s*$")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(raw: str) -> float:
    """Parse '300', '90s', '500ms', '5m' or '1h' into seconds"""
    match = _DURATION_RE.match(raw or "")
    if not match:
        raise ValueError(f"invalid duration: {raw!r}")
    value, unit = match.groups()
    return float(value) * _DURATION_UNITS[unit or "s"]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_duration(name: str, default: str) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        raw = default
    try:
        return parse_duration(raw)
    except ValueError as exc:
        raise ValueError(f"{name}: {exc}") from exc


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection and pool bounds for the SQL store"""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    name: str = "tasks"
    ssl_mode: str = "disable"
    pool_max_conns: int = 10
    pool_max_conn_lifetime: float = 3600.0
    pool_max_conn_idle_time: float = 300.0
    statement_timeout: Optional[float] = None
    # Full SQLAlchemy URL; when set it replaces host/port/user/password/name
    url: Optional[str] = None

    def __post_init__(self):
        if self.pool_max_conns < 1:
            raise ValueError("pool_max_conns must be at least 1")
        if self.pool_max_conn_lifetime <= 0 or self.pool_max_conn_idle_time <= 0:
            raise ValueError("pool lifetimes must be positive")


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "sql"
    log_level: str = "INFO"
    database: DatabaseSettings = field(default_factory=DatabaseSettings)

    def __post_init__(self):
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )


def load_settings() -> Settings:
    """Build Settings from environment variables"""
    timeout_raw = os.getenv("POSTGRES_STATEMENT_TIMEOUT")
    statement_timeout = None
    if timeout_raw and timeout_raw.strip():
        statement_timeout = parse_duration(timeout_raw)

    database = DatabaseSettings(
        host=os.getenv("POSTGRES_HOST", "localhost"),
        port=_env_int("POSTGRES_PORT", 5432),
        user=os.getenv("POSTGRES_USER", "postgres"),
        password=os.getenv("POSTGRES_PASSWORD", ""),
        name=os.getenv("POSTGRES_DB", "tasks"),
        ssl_mode=os.getenv("POSTGRES_SSLMODE", "disable"),
        pool_max_conns=_env_int("POSTGRES_POOL_MAX_CONNS", 10),
        pool_max_conn_lifetime=_env_duration("POSTGRES_POOL_MAX_CONN_LIFETIME", "1h"),
        pool_max_conn_idle_time=_env_duration("POSTGRES_POOL_MAX_CONN_IDLE_TIME", "5m"),
        statement_timeout=statement_timeout,
        url=os.getenv("DATABASE_URL") or None,
    )

    return Settings(
        storage_backend=os.getenv("STORAGE_BACKEND", "sql").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        database=database,
    )
