"""
Configuration management module for the Dhicoins bot.
Loads and validates environment variables.
"""

from decimal import Decimal
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Configuration
    telegram_bot_token: str = Field(..., description="Telegram bot token")
    telegram_webhook_secret: str = Field(
        ..., description="Secret token for webhook validation"
    )
    telegram_webhook_url: str = Field(
        ..., description="Public URL for Telegram webhook"
    )

    # Approver Configuration
    admin_chat_id: int = Field(..., description="Chat that approves or rejects orders")
    admin_wallet_address: str = Field(
        ..., description="Wallet the approver pays USDT out from"
    )

    # Exchange Configuration
    exchange_rate_mvr_to_usdt: Decimal = Field(
        default=Decimal("0.065"), gt=0, description="USDT received per 1 MVR"
    )

    # Payee shown in the payment instructions
    payee_account_name: str = Field(default="Dhicoins", description="Account name")
    payee_bank_name: str = Field(default="BML", description="Bank name")
    payee_account_number: str = Field(
        default="7730000123456", description="Account number"
    )

    # Application Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    environment: str = Field(default="production", description="Environment name")
    host: str = Field(default="0.0.0.0", description="Host to bind to")  # nosec B104
    port: int = Field(default=3000, description="Port to bind to")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the expected values."""
        valid_envs = ["development", "staging", "production", "test"]
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v_lower

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance.
    Creates the instance on first call.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """
    Reload settings from environment.
    Useful for testing.
    """
    global _settings
    _settings = Settings()
    return _settings
