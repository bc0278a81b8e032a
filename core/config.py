"""
Application settings.

Values come from the environment, optionally via a ``.env`` file in the
working directory.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv


@dataclass
class Settings:
    """All runtime configuration in one place."""

    store: str = "local"
    """Requested object store backend: "local" (SQLite) or "supabase"."""

    supabase_url: str = ""
    supabase_key: str = ""

    db_path: str = "gidroatlas.db"
    """SQLite file used by the local store."""

    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"

    log_level: str = "INFO"

    request_timeout: float = 10.0
    """Seconds before an HTTP call to the store or the AI endpoint gives up."""

    @property
    def store_backend(self) -> str:
        """The backend actually used; Supabase needs both URL and key."""
        if self.store == "supabase" and self.supabase_url and self.supabase_key:
            return "supabase"
        return "local"

    @classmethod
    def from_env(cls, load_file: bool = True) -> "Settings":
        if load_file:
            load_dotenv(find_dotenv(usecwd=True))
        env = os.environ
        try:
            timeout = float(env.get("GIDROATLAS_REQUEST_TIMEOUT", "10"))
        except ValueError:
            timeout = 10.0
        return cls(
            store=env.get("GIDROATLAS_STORE", "local").strip().lower(),
            supabase_url=env.get("SUPABASE_URL", "").rstrip("/"),
            supabase_key=env.get("SUPABASE_KEY", ""),
            db_path=env.get("GIDROATLAS_DB_PATH", "gidroatlas.db"),
            gemini_api_key=env.get("GEMINI_API_KEY", ""),
            gemini_model=env.get("GEMINI_MODEL", "gemini-2.5-flash"),
            log_level=env.get("GIDROATLAS_LOG_LEVEL", "INFO").upper(),
            request_timeout=timeout,
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings = None):
    """Set up root logging once for the app and the command-line tools."""
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
