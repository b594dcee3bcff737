"""Service configuration loaded from INSOMNIA_MCP_* environment variables."""

from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_data_dir() -> Path:
    """Insomnia's platform-specific application data directory."""
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Insomnia"
    if sys.platform == "win32":
        return home / "AppData" / "Roaming" / "Insomnia"
    return home / ".config" / "Insomnia"


class StoreSettings(BaseSettings):
    """insomnia-store settings.

    Fields are read from environment variables with the ``INSOMNIA_MCP_``
    prefix, e.g. ``INSOMNIA_MCP_LOG_LEVEL=DEBUG`` maps to ``log_level``.  The
    data directory also honours Insomnia's own ``INSOMNIA_APP_DATA_DIR``.
    """

    model_config = SettingsConfigDict(
        env_prefix="INSOMNIA_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Data storage ----------------------------------------------------------
    app_data_dir: str | None = Field(
        default=None,
        validation_alias=AliasChoices("INSOMNIA_APP_DATA_DIR", "INSOMNIA_MCP_APP_DATA_DIR"),
    )
    """Directory holding the ``insomnia.*.db`` files.  Platform default if unset."""

    project_id: str | None = None
    """Project that owns new collections.  First project on disk if unset."""

    # -- Server ----------------------------------------------------------------
    host: str = "127.0.0.1"
    port: int = 3847

    # -- Helpers ---------------------------------------------------------------

    def resolve_data_dir(self) -> Path:
        if self.app_data_dir:
            return Path(self.app_data_dir).expanduser()
        return default_data_dir()


@lru_cache(maxsize=1)
def get_settings() -> StoreSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return StoreSettings()
