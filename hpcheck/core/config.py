"""
Configuration management for the heat pump efficiency check.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine defaults and thresholds.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HPCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Input fallbacks
    default_postal_code: str = Field(default="10115", description="Used when no postal code is given")
    default_area_m2: float = Field(default=120.0, description="Heated area when missing or invalid")
    min_area_m2: float = Field(default=20.0, description="Lower clamp for heated area")
    default_occupants: int = Field(default=3, description="Occupants when missing or invalid")

    # Prices
    default_price_ct_per_kwh: float = Field(default=30.0, description="Heat pump tariff (ct/kWh)")
    feed_in_tariff_eur_per_kwh: float = Field(default=0.082, description="PV feed-in tariff (EUR/kWh)")

    # Full-year thresholds. Two values exist for historical reasons, see DESIGN.md.
    annualization_full_year_days: int = Field(
        default=350, description="Billing periods at least this long are not extrapolated"
    )
    measured_factor_full_year_days: int = Field(
        default=330, description="Metering periods at least this long yield a seasonal factor"
    )

    # Recommendation thresholds
    pv_recommendation_min_kwh: float = Field(
        default=3000.0, description="Suggest PV above this simulated consumption"
    )
    auditor_deviation_percent: float = Field(
        default=30.0, description="Suggest an energy auditor above this deviation"
    )


# Global settings instance
settings = Settings()
