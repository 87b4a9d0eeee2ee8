"""
Application configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from pydantic_settings import BaseSettings

from app.calculations import policy


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App settings
    app_name: str = "Property Calculators"
    debug: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Fee schedule (override per market without code changes)
    registration_fee_rate: float = policy.REGISTRATION_FEE_RATE
    transfer_fee_rate: float = policy.TRANSFER_FEE_RATE
    agency_fee_rate: float = policy.AGENCY_FEE_RATE
    mortgage_registration_fee_rate: float = policy.MORTGAGE_REGISTRATION_FEE_RATE
    valuation_fee: float = policy.VALUATION_FEE
    mortgage_processing_fee_rate: float = policy.MORTGAGE_PROCESSING_FEE_RATE
    mortgage_processing_fee_cap: float = policy.MORTGAGE_PROCESSING_FEE_CAP
    title_deed_fee: float = policy.TITLE_DEED_FEE

    class Config:
        env_file = get_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"

    def fee_schedule(self) -> policy.FeeSchedule:
        """Build the fee schedule used by the cost calculators."""
        return policy.FeeSchedule(
            registration_fee_rate=self.registration_fee_rate,
            transfer_fee_rate=self.transfer_fee_rate,
            agency_fee_rate=self.agency_fee_rate,
            mortgage_registration_fee_rate=self.mortgage_registration_fee_rate,
            valuation_fee=self.valuation_fee,
            mortgage_processing_fee_rate=self.mortgage_processing_fee_rate,
            mortgage_processing_fee_cap=self.mortgage_processing_fee_cap,
            title_deed_fee=self.title_deed_fee,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
