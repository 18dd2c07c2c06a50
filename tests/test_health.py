"""HTTP surface tests: liveness endpoints and the Telegram webhook route."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from dhicoins_bot.config import Settings
from dhicoins_bot.main import app, build_telegram_handler


@pytest.fixture
def client():
    # Used without a context manager so the Telegram lifespan does not run
    return TestClient(app)


def test_root_liveness(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "Dhicoins Telegram Bot is running"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Request-ID" in response.headers


def test_webhook_rejects_bad_secret(client):
    response = client.post(
        "/webhook/telegram",
        json={"update_id": 1},
        headers={"X-Telegram-Bot-Api-Secret-Token": "wrong"},
    )
    assert response.status_code == 403


def test_webhook_forwards_update(client):
    handler = MagicMock(process_update=AsyncMock())
    app.state.telegram_handler = handler

    response = client.post(
        "/webhook/telegram",
        json={"update_id": 7},
        headers={"X-Telegram-Bot-Api-Secret-Token": "test_secret"},
    )

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    handler.process_update.assert_awaited_once_with({"update_id": 7})


def test_webhook_reports_handler_errors_with_200(client):
    app.state.telegram_handler = MagicMock(
        process_update=AsyncMock(side_effect=RuntimeError("boom"))
    )

    response = client.post(
        "/webhook/telegram",
        json={"update_id": 8},
        headers={"X-Telegram-Bot-Api-Secret-Token": "test_secret"},
    )

    assert response.status_code == 200
    assert response.json()["status"] == "error"


def test_build_telegram_handler_uses_configured_rate(mock_telegram_bot):
    settings = Settings(exchange_rate_mvr_to_usdt="0.07")
    handler = build_telegram_handler(mock_telegram_bot, settings)

    flow = handler.conversation_handler.flow
    assert flow.exchange_rate == Decimal("0.07")
    assert flow.approver_chat_id == settings.admin_chat_id
    assert handler.approval_handler.flow.admin_wallet == settings.admin_wallet_address
