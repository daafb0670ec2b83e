"""PyYAML + environment loader → typed config dataclasses."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""


def mongo_url(host: str, port: int) -> str:
    # IPv6 literals must be bracketed in a MongoDB URI
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"mongodb://{host}:{port}"


@dataclass
class DbConfig:
    host: str = "localhost"
    port: int = 27017
    database: str = "files_manager"
    server_selection_timeout_ms: int = 5000

    @property
    def url(self) -> str:
        return mongo_url(self.host, self.port)


@dataclass
class AppConfig:
    db: DbConfig = field(default_factory=DbConfig)
    log_level: str = "INFO"


def _parse_port(value: object) -> int:
    try:
        port = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid database port: {value!r}") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"Database port out of range: {port}")
    return port


def _parse_log_level(value: object) -> str:
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Invalid log level: {value!r}")
    return level


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load settings.yaml and return a typed AppConfig.

    Falls back to defaults if the file is absent or a section is missing.
    A ``.env`` file is read first; DB_HOST, DB_PORT, DB_DATABASE and
    LOG_LEVEL from the environment override whatever the file says.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    raw: dict = {}
    if path is None:
        path = Path(__file__).parent.parent.parent / "config" / "settings.yaml"

    resolved = Path(path)
    if resolved.exists():
        with resolved.open() as f:
            raw = yaml.safe_load(f) or {}

    db_raw = raw.get("db", {})
    defaults = DbConfig()

    return AppConfig(
        db=DbConfig(
            host=os.getenv("DB_HOST", db_raw.get("host", defaults.host)),
            port=_parse_port(os.getenv("DB_PORT", db_raw.get("port", defaults.port))),
            database=os.getenv("DB_DATABASE", db_raw.get("database", defaults.database)),
            server_selection_timeout_ms=db_raw.get(
                "server_selection_timeout_ms", defaults.server_selection_timeout_ms
            ),
        ),
        log_level=_parse_log_level(os.getenv("LOG_LEVEL", raw.get("log_level", "INFO"))),
    )
