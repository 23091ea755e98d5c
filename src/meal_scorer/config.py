"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_path: str = "data/foods.csv"
    search_result_limit: int = Field(default=20, ge=1)
    build_catalog_on_startup: bool = True
    admin_token: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    meal_snapshots_table: str = "meal_snapshots"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def uses_supabase(self) -> bool:
        """Whether saved meals go to Supabase instead of process memory."""
        return bool(self.supabase_url and self.supabase_service_key)
