"""Configuration management for calc-tools."""

import logging
from decimal import Decimal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CALC_TOOLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Display settings
    currency_symbol: str = "$"

    # Settlement settings
    settlement_epsilon: Decimal = Field(default=Decimal("0.01"), gt=0)

    # Monte Carlo settings
    simulation_seed: int | None = None  # None = fresh entropy on every run
    max_simulation_cells: int = Field(default=5_000_000, gt=0)

    # Live clock settings
    clock_interval_seconds: float = Field(default=1.0, gt=0)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check the CALC_TOOLS_* environment "
            f"variables and your .env file.\n"
            f"Error: {e}"
        ) from e
