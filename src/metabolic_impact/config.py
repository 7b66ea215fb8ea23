"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from metabolic_impact.domain.glucose import GlucoseUnit

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_UNIT_ALIASES = {
    "mg/dl": GlucoseUnit.MG_DL,
    "mgdl": GlucoseUnit.MG_DL,
    "mmol/l": GlucoseUnit.MMOL_L,
    "mmol": GlucoseUnit.MMOL_L,
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    default_glucose_unit: str = GlucoseUnit.MG_DL.value
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_glucose_unit(raw: str | None) -> GlucoseUnit:
    """Parse a glucose unit name from env or a request."""
    if raw is None:
        return GlucoseUnit.MG_DL
    unit = _UNIT_ALIASES.get(raw.strip().lower())
    if unit is None:
        raise ValueError(f"Unknown glucose unit: {raw!r}")
    return unit
