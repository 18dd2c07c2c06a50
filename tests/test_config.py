"""Tests for settings loading and validation."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from dhicoins_bot.config import Settings, get_settings, reload_settings


def test_defaults():
    settings = Settings()

    assert settings.exchange_rate_mvr_to_usdt == Decimal("0.065")
    assert settings.payee_account_name == "Dhicoins"
    assert settings.payee_bank_name == "BML"
    assert settings.payee_account_number == "7730000123456"
    assert settings.environment == "test"


def test_rate_from_environment(monkeypatch):
    monkeypatch.setenv("EXCHANGE_RATE_MVR_TO_USDT", "0.0649")
    assert Settings().exchange_rate_mvr_to_usdt == Decimal("0.0649")


@pytest.mark.parametrize("rate", ["0", "-0.01"])
def test_rate_must_be_positive(rate):
    with pytest.raises(ValidationError):
        Settings(exchange_rate_mvr_to_usdt=rate)


def test_log_level_is_normalised():
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Settings(log_level="chatty")


def test_invalid_environment():
    with pytest.raises(ValidationError):
        Settings(environment="moon")


def test_get_settings_is_cached():
    first = reload_settings()
    assert get_settings() is first
