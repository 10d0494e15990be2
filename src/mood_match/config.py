"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from mood_match.services.matchmaker import MatchStrategy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_token: str
    match_strategy: MatchStrategy = MatchStrategy.PREFERRED_FIRST
    reaper_interval_seconds: float = 30.0
    session_max_age_seconds: float = 120.0
    min_age: int = 18
    photo_verifier_url: str | None = None
    photo_verifier_timeout_seconds: float = 10.0
    default_trust_score: int = 75
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
