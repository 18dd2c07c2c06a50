"""Pytest configuration and fixtures."""

import os
import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram import Bot

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# dhicoins_bot.main builds the app at import time, so settings must resolve
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:test_token_1234567890123456789012")
os.environ.setdefault("TELEGRAM_WEBHOOK_SECRET", "test_secret")
os.environ.setdefault("TELEGRAM_WEBHOOK_URL", "https://test.com/webhook/telegram")
os.environ.setdefault("ADMIN_CHAT_ID", "-1001234567890")
os.environ.setdefault("ADMIN_WALLET_ADDRESS", "TAdminWalletAddress0000000000000000")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("ENVIRONMENT", "test")

from dhicoins_bot.services.conversation_flow import ConversationFlow, PayeeDetails  # noqa: E402
from dhicoins_bot.services.approval_flow import ApprovalFlow  # noqa: E402
from dhicoins_bot.services.message_dispatcher import MessageDispatcher  # noqa: E402
from dhicoins_bot.services.order_store import OrderStore  # noqa: E402
from dhicoins_bot.services.session_store import SessionStore  # noqa: E402


ADMIN_CHAT_ID = -1001234567890
USER_ID = 123456789
ADMIN_WALLET = "TAdminWalletAddress0000000000000000"
VALID_WALLET = "T" + "A" * 33
FIXED_NOW = datetime(2024, 11, 10, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_telegram_bot():
    """Mock Telegram bot for testing."""
    bot = MagicMock(spec=Bot)
    bot.send_message = AsyncMock()
    bot.send_photo = AsyncMock()
    bot.edit_message_caption = AsyncMock()
    bot.answer_callback_query = AsyncMock()

    return bot


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def order_store():
    return OrderStore()


@pytest.fixture
def payee():
    return PayeeDetails(
        account_name="Dhicoins", bank_name="BML", account_number="7730000123456"
    )


@pytest.fixture
def conversation_flow(order_store, payee):
    return ConversationFlow(
        exchange_rate=Decimal("0.065"),
        approver_chat_id=ADMIN_CHAT_ID,
        payee=payee,
        order_id_factory=order_store.generate_order_id,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def approval_flow(order_store):
    return ApprovalFlow(
        order_store=order_store,
        approver_chat_id=ADMIN_CHAT_ID,
        admin_wallet=ADMIN_WALLET,
    )


@pytest.fixture
def dispatcher(mock_telegram_bot):
    return MessageDispatcher(mock_telegram_bot)
