#!/usr/bin/env python3
"""
Register, delete or inspect the bot's Telegram webhook.

Usage:
    python scripts/webhook.py register
    python scripts/webhook.py delete
    python scripts/webhook.py info

Reads TELEGRAM_BOT_TOKEN, TELEGRAM_WEBHOOK_URL and TELEGRAM_WEBHOOK_SECRET
(and the rest of the bot settings) from the environment or .env.
"""
import argparse
import asyncio
import sys
from pathlib import Path

# Make the dhicoins_bot package importable when run from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from telegram import Bot
from dhicoins_bot.config import get_settings
from dhicoins_bot.logging_config import get_logger, setup_logging
from dhicoins_bot.utils.webhook_manager import WebhookManager


logger = get_logger(__name__)


def print_webhook_info(webhook_info) -> None:
    print("\n" + "=" * 60)
    print("Webhook Information:")
    print("=" * 60)
    print(f"URL: {webhook_info.url or '(not set)'}")
    print(f"Pending update count: {webhook_info.pending_update_count}")
    print(f"Allowed updates: {webhook_info.allowed_updates}")
    if webhook_info.last_error_date:
        print(f"Last error date: {webhook_info.last_error_date}")
        print(f"Last error message: {webhook_info.last_error_message}")
    print("=" * 60)


async def main(command: str) -> int:
    settings = get_settings()
    setup_logging(log_level=settings.log_level, use_json=False)

    bot = Bot(token=settings.telegram_bot_token)
    manager = WebhookManager(
        bot=bot,
        webhook_url=settings.telegram_webhook_url,
        webhook_secret=settings.telegram_webhook_secret,
    )

    async with bot:
        if command == "register":
            logger.info(f"Registering webhook: {settings.telegram_webhook_url}")
            if not await manager.register_webhook():
                logger.error("✗ Failed to register webhook")
                return 1
        elif command == "delete":
            if not await manager.delete_webhook():
                logger.error("✗ Failed to delete webhook")
                return 1

        webhook_info = await manager.get_webhook_info()
        if webhook_info is None:
            return 1
        print_webhook_info(webhook_info)

    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("command", choices=["register", "delete", "info"])
    args = parser.parse_args()
    sys.exit(asyncio.run(main(args.command)))
