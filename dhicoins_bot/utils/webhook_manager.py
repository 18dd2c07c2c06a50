"""
Webhook management utilities for the Telegram bot.
"""

from typing import Optional, Tuple
from urllib.parse import urlparse
from telegram import Bot, WebhookInfo
from telegram.error import TelegramError

from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


# Ports Telegram will deliver webhooks to
ALLOWED_PORTS = [443, 80, 88, 8443]
LOCAL_HOSTS = ["localhost", "127.0.0.1"]

# The bot only reacts to user messages and approver button presses
ALLOWED_UPDATES = ["message", "callback_query"]


class WebhookManager:
    """
    Registers and removes the Telegram webhook for this bot.
    """

    def __init__(self, bot: Bot, webhook_url: str, webhook_secret: str):
        """
        Initialize webhook manager.

        Args:
            bot: Telegram Bot instance
            webhook_url: Public URL of /webhook/telegram
            webhook_secret: Secret token Telegram echoes back in a header
        """
        self.bot = bot
        self.webhook_url = webhook_url
        self.webhook_secret = webhook_secret

    def validate_webhook_url(self, url: str) -> Tuple[bool, str]:
        """
        Check a URL against Telegram's webhook requirements.

        HTTPS is required except on localhost, query strings are not
        allowed and the port must be one Telegram delivers to.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not url:
            return False, "Webhook URL cannot be empty"

        try:
            parsed = urlparse(url)
            port = parsed.port
        except ValueError as e:
            return False, f"Invalid URL format: {e}"

        if parsed.scheme not in ["https", "http"]:
            return False, "Webhook URL must use HTTP or HTTPS protocol"

        if not parsed.hostname:
            return False, "Webhook URL must have a valid hostname"

        if parsed.scheme == "http" and parsed.hostname not in LOCAL_HOSTS:
            return False, "Webhook URL must use HTTPS (HTTP only allowed for localhost)"

        if parsed.query:
            return False, "Webhook URL cannot contain query parameters"

        if port and port not in ALLOWED_PORTS:
            return False, f"Webhook port must be one of {ALLOWED_PORTS}"

        return True, ""

    async def register_webhook(self) -> bool:
        """
        Register the webhook with Telegram.

        Returns:
            True if successful, False otherwise
        """
        is_valid, error_msg = self.validate_webhook_url(self.webhook_url)
        if not is_valid:
            logger.error(
                "Invalid webhook URL",
                extra={"error": error_msg, "url": self.webhook_url},
            )
            return False

        try:
            success = await self.bot.set_webhook(
                url=self.webhook_url,
                secret_token=self.webhook_secret,
                allowed_updates=ALLOWED_UPDATES,
                drop_pending_updates=False,
            )
        except TelegramError as e:
            logger.error(
                "Telegram error during webhook registration",
                extra={"error": str(e)},
                exc_info=True,
            )
            return False

        if success:
            logger.info(
                "Webhook registered successfully",
                extra={"webhook_url": self.webhook_url},
            )
        else:
            logger.error("Failed to register webhook")

        return success

    async def delete_webhook(self) -> bool:
        """
        Delete the webhook from Telegram.

        Returns:
            True if successful, False otherwise
        """
        try:
            success = await self.bot.delete_webhook(drop_pending_updates=False)
        except TelegramError as e:
            logger.error(
                "Telegram error during webhook deletion",
                extra={"error": str(e)},
                exc_info=True,
            )
            return False

        if success:
            logger.info("Webhook deleted successfully")
        else:
            logger.error("Failed to delete webhook")

        return success

    async def get_webhook_info(self) -> Optional[WebhookInfo]:
        """
        Get current webhook information.

        Returns:
            WebhookInfo, or None if Telegram could not be reached
        """
        try:
            webhook_info = await self.bot.get_webhook_info()
        except TelegramError as e:
            logger.error(
                "Error retrieving webhook info", extra={"error": str(e)}, exc_info=True
            )
            return None

        logger.info(
            "Retrieved webhook info",
            extra={
                "url": webhook_info.url,
                "pending_update_count": webhook_info.pending_update_count,
                "last_error_message": webhook_info.last_error_message,
            },
        )
        return webhook_info
