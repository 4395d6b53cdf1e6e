"""Configuration for the Old Forest capsule."""

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "OLDFOREST_"


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(ENV_PREFIX + name, default)


def _env_path(name: str) -> Path | None:
    value = _env(name)
    return Path(value) if value else None


def _env_flag(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None or value == "":
        return default
    return value.lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./oldforest.db"
    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from OLDFOREST_* environment variables."""
        return cls(
            database_url=_env("DATABASE_URL", cls.database_url),
            host=_env("HOST", cls.host),
            port=int(_env("PORT", str(cls.port))),
            certfile=_env_path("CERTFILE"),
            keyfile=_env_path("KEYFILE"),
            log_level=_env("LOG_LEVEL", cls.log_level),
            log_file=_env_path("LOG_FILE"),
            json_logs=_env_flag("JSON_LOGS", cls.json_logs),
            hash_fingerprints=_env_flag("HASH_FINGERPRINTS", cls.hash_fingerprints),
            max_sessions=int(_env("MAX_SESSIONS", str(cls.max_sessions))),
        )
