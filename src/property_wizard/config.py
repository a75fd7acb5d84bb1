"""Application configuration via pydantic-settings.

Reads from .env file or environment variables. Complex values such as the
commission table are given as JSON, e.g.
``COMMISSION_RATES='{"sell": {"owner": 10, "agent": 50}}'``.

Usage:
    from property_wizard.config import get_settings
    settings = get_settings()
    print(settings.company_name)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from property_wizard.domain.enums import TransactionType


class CommissionRate(BaseModel):
    """Commission percentages for one transaction type."""

    owner: float = Field(..., ge=0, le=100)
    agent: float = Field(..., ge=0, le=100)


def _default_commission_rates() -> dict[TransactionType, CommissionRate]:
    return {
        TransactionType.SALE: CommissionRate(owner=10, agent=50),
        TransactionType.RENT: CommissionRate(owner=10, agent=0),
        TransactionType.JOINT_VENTURE: CommissionRate(owner=10, agent=50),
        TransactionType.SHORTLET: CommissionRate(owner=5, agent=50),
    }


class Settings(BaseSettings):
    """Central configuration for the submission wizards."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_log_level: str = "INFO"
    app_json_logs: bool = False

    # --- Marketplace ---
    company_name: str = "Khabiteq Realty"
    currency: str = "NGN"
    commission_rates: dict[TransactionType, CommissionRate] = Field(
        default_factory=_default_commission_rates
    )

    # --- Form Rules ---
    min_brief_pictures: int = 4
    max_preference_areas: int = 3
    max_notes_length: int = 1000

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
