"""Configuration for Libro.

Values come from, in increasing priority:
- built-in defaults
- <libro dir>/config.yml
- environment (LIBRO_DB_PATH)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from libro.errors import LibroError

DEFAULT_DB_PATH = "libro.db"
DEFAULT_TICK_INTERVAL = 0.1
DEFAULT_MESSAGE_TTL = 3.0


def get_libro_dir() -> Path:
    """Directory holding config.yml and the TUI log."""
    if env_dir := os.environ.get("LIBRO_DIR"):
        return Path(env_dir)
    return Path.home() / ".libro"


@dataclass(frozen=True)
class Config:
    db_path: Path = Path(DEFAULT_DB_PATH)
    tick_interval: float = DEFAULT_TICK_INTERVAL
    message_ttl: float = DEFAULT_MESSAGE_TTL

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        config_path = config_path or get_libro_dir() / "config.yml"
        data: dict = {}
        if config_path.exists():
            try:
                data = yaml.safe_load(config_path.read_text()) or {}
            except yaml.YAMLError as e:
                raise LibroError(f"Invalid config file {config_path}: {e}") from e
            if not isinstance(data, dict):
                raise LibroError(f"Invalid config file {config_path}: expected a mapping")

        db_path = os.environ.get("LIBRO_DB_PATH") or data.get("db_path") or DEFAULT_DB_PATH
        return cls(
            db_path=Path(db_path).expanduser(),
            tick_interval=float(data.get("tick_interval", DEFAULT_TICK_INTERVAL)),
            message_ttl=float(data.get("message_ttl", DEFAULT_MESSAGE_TTL)),
        )

    @property
    def log_path(self) -> Path:
        return get_libro_dir() / "tui.log"
