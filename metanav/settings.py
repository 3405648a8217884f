from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .path import NavigationPath
from .tabs import DebugOverrides, Tab


class Settings(BaseSettings):
    """Configuration for the router core and its tooling.

    Values are loaded from environment variables and `.env`.

    Notes:
    - The METANAV_OVERRIDE_* / METANAV_SKIP_* knobs are local-debug
      overrides. They only take effect through `debug_overrides()`, which
      is handed to `create_tabbed_router_state` once at startup.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging
    METANAV_LOG_LEVEL: str = Field(default="INFO")
    METANAV_LOG_TO_FILE: bool = Field(default=False)
    METANAV_LOG_DIR: Path = Field(default=Path("_logs"))
    # Timed rotation retention count (days).
    METANAV_LOG_BACKUP_COUNT: int = Field(default=14)

    # Local-debug overrides
    METANAV_OVERRIDE_ACTIVE_TAB: str | None = Field(default=None)
    # Comma-separated segment identifiers below the root, e.g. "login,loginform"
    METANAV_OVERRIDE_ROUTER_PATH: str | None = Field(default=None)
    METANAV_SKIP_LOGIN_ROUTE_TO_ROOT: bool = Field(default=False)

    @field_validator("METANAV_OVERRIDE_ACTIVE_TAB")
    @classmethod
    def _known_tab(cls, value: str | None) -> str | None:
        if value in (None, ""):
            return None
        if Tab.parse(value) is None:
            names = ", ".join(t.name.lower() for t in Tab)
            raise ValueError(f"unknown tab '{value}' (expected one of: {names})")
        return value

    def debug_overrides(self) -> DebugOverrides:
        router_path = None
        if self.METANAV_OVERRIDE_ROUTER_PATH:
            parts = [p.strip() for p in self.METANAV_OVERRIDE_ROUTER_PATH.split(",") if p.strip()]
            router_path = NavigationPath.build(*parts)
        return DebugOverrides(
            active_tab=Tab.parse(self.METANAV_OVERRIDE_ACTIVE_TAB),
            router_path=router_path,
            skip_login_route_to_root=self.METANAV_SKIP_LOGIN_ROUTE_TO_ROOT,
        )


def load_settings() -> Settings:
    return Settings()
