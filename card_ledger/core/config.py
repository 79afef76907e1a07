"""
Configuration settings for the card ledger.
Loads environment variables and provides application settings.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    """

    # Database
    DATABASE_URL: str = "sqlite:///cards.s3db"
    DATABASE_ECHO: bool = False

    # Card issuing
    CARD_BIN: str = "400000"
    PIN_LENGTH: int = 4

    # Business rules
    UNIFY_LOGIN_ERRORS: bool = False
    REQUIRE_ZERO_BALANCE_ON_CLOSE: bool = False

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "standard"

    PROJECT_NAME: str = "Card Ledger"
    VERSION: str = "1.0.0"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("CARD_BIN")
    @classmethod
    def bin_must_be_six_digits(cls, value: str) -> str:
        if len(value) != 6 or not value.isdigit():
            raise ValueError("CARD_BIN must be exactly 6 digits")
        return value

    @field_validator("PIN_LENGTH")
    @classmethod
    def pin_length_in_range(cls, value: int) -> int:
        if not 1 <= value <= 12:
            raise ValueError("PIN_LENGTH must be between 1 and 12")
        return value

    @field_validator("LOG_FORMAT")
    @classmethod
    def known_log_format(cls, value: str) -> str:
        if value not in ("standard", "json"):
            raise ValueError("LOG_FORMAT must be 'standard' or 'json'")
        return value


# Create global settings instance
settings = Settings()
