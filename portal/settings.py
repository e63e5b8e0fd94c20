from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Portal settings.

    Notes:
    - Defaults point at a local directory service and a local portal, matching a dev setup.
    - Every field can be overridden with a `PORTAL_`-prefixed env var.
    """

    model_config = SettingsConfigDict(env_prefix="PORTAL_", extra="ignore")

    directory_base_url: str = "http://localhost:3000/api/personnel"
    directory_timeout_seconds: float = 10.0
    portal_base_url: str = "http://localhost:3001"
    portal_timeout_seconds: float = 10.0

    access_config_path: str | None = None
    session_dir: str | None = None
    log_level: str = "INFO"
    guard_log_level: str | None = None

    def resolved_access_config_path(self) -> Path:
        if self.access_config_path:
            return Path(self.access_config_path)

        repo_root = Path(__file__).resolve().parents[1]
        return repo_root / "config" / "access_policy.yaml"

    def resolved_session_dir(self) -> Path:
        if self.session_dir:
            return Path(self.session_dir)

        return Path.home() / ".portal" / "session"


@lru_cache
def get_settings() -> Settings:
    return Settings()
