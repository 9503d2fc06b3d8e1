"""Configuration loaded from REPOSPACES_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RepospacesSettings(BaseSettings):
    """Repospaces settings.

    All fields are read from environment variables with the ``REPOSPACES_``
    prefix.  For example, ``REPOSPACES_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    List fields accept JSON, e.g. ``REPOSPACES_SEARCH_ROOTS='["~/src"]'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REPOSPACES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"

    # -- Local data ------------------------------------------------------------
    data_root: str = "~/.repospaces"
    """Directory holding ``localWorkspaces.json`` and ``cloudWorkspaces.json``."""

    # -- Remote workspaces API -------------------------------------------------
    api_url: str = "https://api.gitkraken.com"
    api_token: SecretStr | None = None
    """Bearer token for the workspaces API.  Cloud workspaces are skipped if unset."""

    api_timeout: float = 30.0

    # -- Local path search -----------------------------------------------------
    search_roots: list[str] = Field(default_factory=list)
    """Directories scanned for clones of cloud repositories."""

    search_depth: int = 3
    """How many directory levels below each search root are inspected."""

    # -- Repository opening ----------------------------------------------------
    virtual_providers: list[str] = Field(default_factory=lambda: ["github"])
    """Hosting providers whose repositories can be opened without a clone."""

    # -- Helpers ---------------------------------------------------------------

    @property
    def data_path(self) -> Path:
        return Path(self.data_root).expanduser()

    @property
    def search_paths(self) -> list[Path]:
        return [Path(root).expanduser() for root in self.search_roots]


@lru_cache(maxsize=1)
def get_settings() -> RepospacesSettings:
    """Return a cached settings instance.

    Reads from environment variables and ``.env`` on first call, then returns
    the same object.  Call ``get_settings.cache_clear()`` in tests to force a
    re-read after overriding env vars.
    """
    return RepospacesSettings()
