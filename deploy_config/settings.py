"""
Runtime settings for the grid deployer.

Loaded from environment variables (prefix ``GRID_DEPLOYER_``) and an optional
``.env`` file. Values are validated on load; invalid values raise
``pydantic.ValidationError``.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_DEPLOYMENT, GRID_STRATEGY_PATH


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Strategy source
    default_deployment: str = DEFAULT_DEPLOYMENT
    strategy_source_url: str = GRID_STRATEGY_PATH

    # Explorer links for deployed strategies
    explorer_base_url: str = "https://v2.raindex.finance/orders"

    # Transaction submission (JSON-RPC wallet endpoint)
    rpc_url: str = "http://localhost:8545"
    rpc_timeout_seconds: float = Field(30.0, gt=0)

    # Debounce windows and bounded waits
    form_validation_debounce_seconds: float = Field(0.3, ge=0)
    token_validation_debounce_seconds: float = Field(1.0, ge=0)
    token_validation_timeout_seconds: float = Field(10.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @field_validator("explorer_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    model_config = SettingsConfigDict(
        env_prefix="GRID_DEPLOYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
