# rentledger/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10-17.v1"
    database_url: str = "sqlite:///./rentledger.db"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Logging ----
    log_level: str = "INFO"
    sql_log_level: str = "WARNING"

    # ---- Bridge program ----
    default_total_program_months: int = 24

    # ---- Listing ----
    lease_list_default_limit: int = 200
    lease_list_max_limit: int = 2000

    def model_post_init(self, __context) -> None:
        if self.default_total_program_months <= 0:
            raise ValueError("default_total_program_months must be positive")

        env = (self.app_env or "local").strip().lower()
        if env in ("prod", "production"):
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")


settings = Settings()
