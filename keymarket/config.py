"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and KEYMARKET_* environment variables.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketConfig(BaseSettings):
    """Marketplace configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export KEYMARKET_LOG_LEVEL=DEBUG
        export KEYMARKET_DEFAULT_FEE_PERCENT=5

    Or via .env file::

        KEYMARKET_ENVIRONMENT=staging
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="KEYMARKET_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Fee policy
    default_fee_percent: int = Field(default=2, ge=0, le=100)

    # Text bounds (characters)
    max_description_length: int = 256
    max_category_length: int = 64
    max_key_length: int = 512

    # Administrator used by the CLI demo; library callers pass their own
    admin_principal: str = "marketplace-admin"


# Module-level singleton — import as `from keymarket.config import config`
config = MarketConfig()
