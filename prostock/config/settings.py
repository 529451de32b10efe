"""
ProStock settings.

Each concern reads its own prefixed environment variables (BACKEND_, CART_,
LLM_, ...); Settings reads .env and nests them.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BackendSettings(BaseSettings):
    """Remote RPC backend configuration."""

    model_config = SettingsConfigDict(env_prefix="BACKEND_", populate_by_name=True)

    # Deployments historically exported the web app URL as GAS_URL / VITE_GAS_URL
    url: str = Field(
        default="",
        validation_alias=AliasChoices("BACKEND_URL", "GAS_URL", "VITE_GAS_URL"),
    )
    timeout: float = 30.0  # seconds, per request
    follow_redirects: bool = True

    # Retry settings (read-only actions only)
    max_retries: int = 3
    retry_delay: float = 0.5
    retry_multiplier: float = 2.0

    @property
    def is_configured(self) -> bool:
        return bool(self.url.strip())


class CacheSettings(BaseSettings):
    """Client-side stock cache configuration."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    refresh_timeout: float = 60.0  # seconds, whole refresh round trip


class CartSettings(BaseSettings):
    """Cart entry configuration."""

    model_config = SettingsConfigDict(env_prefix="CART_")

    # Validate outbound lines against stock minus what is already in the cart
    cumulative_stock_check: bool = False


class SearchSettings(BaseSettings):
    """Item autocomplete configuration."""

    model_config = SettingsConfigDict(env_prefix="SEARCH_")

    min_query_length: int = 2
    debounce_ms: int = 300
    max_results: int = 20


class LLMSettings(BaseSettings):
    """Ollama model behind the inventory assistant."""

    model_config = SettingsConfigDict(env_prefix="LLM_")

    provider: Literal["ollama"] = "ollama"
    model_name: str = "llama3.1:8b"
    host: str = "http://localhost:11434"
    timeout: int = 120
    max_tokens: int = 2048
    temperature: float = 0.3

    # consecutive failures before the circuit opens
    failure_threshold: int = 3
    cooldown_seconds: int = 60

    max_retries: int = 3
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0

    warmup_on_start: bool = False


class StorageSettings(BaseSettings):
    """Local client state storage configuration."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "prostock.db"
    session_key: str = "prostock_session"

    # aiosqlite pool
    pool_size: int = 2
    busy_timeout_ms: int = 30000

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class ExportSettings(BaseSettings):
    """Spreadsheet export configuration."""

    model_config = SettingsConfigDict(env_prefix="EXPORT_")

    output_dir: Path = Path("exports")
    sheet_name: str = "Audit_ProStock"


class NotificationSettings(BaseSettings):
    """User notification configuration."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    history_size: int = 50


class APISettings(BaseSettings):
    """HTTP surface served by uvicorn."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ProStock"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    backend: BackendSettings = Field(default_factory=BackendSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    cart: CartSettings = Field(default_factory=CartSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    api: APISettings = Field(default_factory=APISettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call reloads the environment."""
    global _settings
    _settings = None
