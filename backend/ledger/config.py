"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (the default key is for local demos only)
    - get_settings() is cached (lru_cache) — single instance per process
    - port is validated to 1..65535 at load time

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: `uvicorn ledger.main:app` works out-of-the-box
      against data/articles.json
    - encryption_key is kept as configured; the cipher normalizes it to 32 bytes
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ledger.core.domain_types import StoreBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Cipher
    encryption_key: str = "mi_clave_secreta_de_32_caracteres"

    # Record store
    store_backend: StoreBackend = StoreBackend.JSON
    articles_path: Path = Path("data/articles.json")
    exchange_rates_path: Path = Path("data/exchange_rates.json")

    # Database (store_backend == "database")
    database_url: str = "sqlite+aiosqlite:///articles.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs are postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Valuation policies
    undecryptable_placeholder: str = "[undecryptable]"
    strict_amount_updates: bool = False

    # API
    host: str = "0.0.0.0"
    port: int = Field(3001, ge=1, le=65535)
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
