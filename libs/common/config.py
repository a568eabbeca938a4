from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings."""

    # Application
    ENVIRONMENT: Literal["local", "development", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Europe/Helsinki"

    # Registration rules
    DEFAULT_COUNTRY_CODE: str = "FI"
    MANUAL_REGISTRATION_MIN_AGE: int = 13
    PHOTO_PERMISSION_MIN_AGE: int = 15
    ADULT_AGE: int = 18

    # Profile store
    PROFILE_SERVICE_URL: str = "http://profile-service:8080"
    PROFILE_SERVICE_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DEFAULT_COUNTRY_CODE")
    @classmethod
    def normalize_country_code(cls, v: str) -> str:
        return v.strip().upper()

    @model_validator(mode="after")
    def check_age_threshold_order(self) -> "Settings":
        # The derived age flags are only consistent with each other when the
        # thresholds are ordered.
        if not (
            0
            <= self.MANUAL_REGISTRATION_MIN_AGE
            <= self.PHOTO_PERMISSION_MIN_AGE
            <= self.ADULT_AGE
        ):
            raise ValueError(
                "Age thresholds must satisfy MANUAL_REGISTRATION_MIN_AGE <= "
                "PHOTO_PERMISSION_MIN_AGE <= ADULT_AGE "
                f"(got {self.MANUAL_REGISTRATION_MIN_AGE}, "
                f"{self.PHOTO_PERMISSION_MIN_AGE}, {self.ADULT_AGE})"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Return the global settings instance, cached.
    """
    return Settings()
