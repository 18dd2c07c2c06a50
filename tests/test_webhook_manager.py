"""
Test webhook manager functionality.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock, Mock
from telegram.error import TelegramError

from dhicoins_bot.utils.webhook_manager import ALLOWED_UPDATES, WebhookManager


@pytest.fixture
def manager():
    return WebhookManager(Mock(), "https://example.com/webhook/telegram", "secret")


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/webhook/telegram",
        "http://localhost:8443/webhook",
        "https://example.com:443/webhook",
        "https://example.com:8443/webhook",
    ],
)
def test_valid_urls(manager, url):
    assert manager.validate_webhook_url(url) == (True, "")


@pytest.mark.parametrize(
    "url, fragment",
    [
        ("", "empty"),
        ("http://example.com/webhook", "HTTPS"),
        ("ftp://example.com/webhook", "protocol"),
        ("https://example.com/webhook?token=123", "query parameters"),
        ("https://example.com:9000/webhook", "port"),
    ],
)
def test_invalid_urls(manager, url, fragment):
    is_valid, error = manager.validate_webhook_url(url)
    assert is_valid is False
    assert fragment.lower() in error.lower()


@pytest.mark.asyncio
async def test_register_webhook_success():
    bot = MagicMock()
    bot.set_webhook = AsyncMock(return_value=True)
    manager = WebhookManager(bot, "https://example.com/webhook/telegram", "secret")

    assert await manager.register_webhook() is True
    bot.set_webhook.assert_awaited_once_with(
        url="https://example.com/webhook/telegram",
        secret_token="secret",
        allowed_updates=ALLOWED_UPDATES,
        drop_pending_updates=False,
    )


@pytest.mark.asyncio
async def test_register_webhook_invalid_url_skips_telegram():
    bot = MagicMock()
    bot.set_webhook = AsyncMock()
    manager = WebhookManager(bot, "http://example.com/webhook", "secret")

    assert await manager.register_webhook() is False
    bot.set_webhook.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_webhook_telegram_error():
    bot = MagicMock()
    bot.set_webhook = AsyncMock(side_effect=TelegramError("Unauthorized"))
    manager = WebhookManager(bot, "https://example.com/webhook/telegram", "secret")

    assert await manager.register_webhook() is False


@pytest.mark.asyncio
async def test_delete_webhook():
    bot = MagicMock()
    bot.delete_webhook = AsyncMock(return_value=True)
    manager = WebhookManager(bot, "", "")

    assert await manager.delete_webhook() is True
    bot.delete_webhook.assert_awaited_once_with(drop_pending_updates=False)
