"""
Configuration helpers for the userhub backend.

Exposes a Settings object that reads environment variables (database URL,
log sinks, listen address) so that routers/services do not fetch os.environ
directly.
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    log_level: str
    log_dir: str
    log_console: bool
    host: str
    port: int

    @property
    def is_production(self) -> bool:
        return self.app_env in {"prod", "production"}


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL") or f"sqlite:///{DATA_DIR / 'app.db'}",
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_dir=os.getenv("LOG_DIR") or str(DATA_DIR),
        log_console=_bool(os.getenv("LOG_CONSOLE"), app_env not in {"prod", "production"}),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_int(os.getenv("PORT", "3000"), 3000),
    )
