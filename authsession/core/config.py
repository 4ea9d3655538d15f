"""
Application configuration.

All settings are loaded from environment variables (or a .env file).
Pydantic-settings validates and types every value at startup, so
misconfiguration fails fast instead of at runtime.  Settings are
frozen: session lifetimes and limits are fixed for the life of the
process.
"""

from datetime import timedelta

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ──────────────────────────────────────────────────────────
    APP_NAME: str = "Auth Session Manager"
    DEBUG: bool = False

    # ── JWT / Auth ───────────────────────────────────────────────────
    SECRET_KEY: str = "CHANGE-ME-in-production-use-a-real-secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=15, gt=0)

    # ── Sessions ─────────────────────────────────────────────────────
    # The refresh lifetime is also the absolute session lifetime.
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, gt=0)
    SESSION_SWEEP_INTERVAL_MINUTES: int = Field(default=5, gt=0)
    MAX_SESSIONS_PER_USER: int = Field(default=5, gt=0)

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @property
    def access_token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return timedelta(days=self.REFRESH_TOKEN_EXPIRE_DAYS)

    @property
    def sweep_interval(self) -> timedelta:
        return timedelta(minutes=self.SESSION_SWEEP_INTERVAL_MINUTES)

    @model_validator(mode="after")
    def check_lifetimes(self) -> "Settings":
        if self.access_token_lifetime >= self.refresh_token_lifetime:
            raise ValueError(
                "ACCESS_TOKEN_EXPIRE_MINUTES must be shorter than REFRESH_TOKEN_EXPIRE_DAYS"
            )
        if self.sweep_interval >= self.refresh_token_lifetime:
            raise ValueError(
                "SESSION_SWEEP_INTERVAL_MINUTES must be shorter than REFRESH_TOKEN_EXPIRE_DAYS"
            )
        return self


settings = Settings()
