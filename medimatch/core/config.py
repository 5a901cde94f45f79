# medimatch/core/config.py
from functools import lru_cache
from typing import List, Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

StoreBackend = Literal["supabase", "mongo", "memory"]


class ServerSettings(BaseSettings):
    """HTTP-level options; readable without any store credentials."""

    http_timeout: float = 10.0
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: str = "*"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


class Settings(ServerSettings):
    store_backend: StoreBackend = "supabase"

    # Hosted store (Supabase / PostgREST)
    supabase_url: str = Field("", validation_alias=AliasChoices("SUPABASE_URL", "VITE_SUPABASE_URL"))
    supabase_anon_key: str = Field(
        "", validation_alias=AliasChoices("SUPABASE_ANON_KEY", "VITE_SUPABASE_ANON_KEY")
    )

    # Self-hosted store
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "medimatch"

    @model_validator(mode="after")
    def _require_store_credentials(self):
        if self.store_backend == "supabase" and not (self.supabase_url and self.supabase_anon_key):
            raise ValueError("Missing Supabase environment variables")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
