"""
Telegram update handler and message router.
"""

from typing import Any, Dict, Optional
from telegram import Bot, CallbackQuery, Message, Update
from telegram.error import TelegramError

from dhicoins_bot.models.events import (
    ButtonDecision,
    ConversationEvent,
    PhotoUpload,
    SelectBuy,
    SelectSell,
    StartCommand,
    TextMessage,
)
from dhicoins_bot.handlers.approval_handler import ApprovalHandler
from dhicoins_bot.handlers.conversation_handler import ConversationHandler
from dhicoins_bot.services.approval_flow import parse_decision_data
from dhicoins_bot.utils.messages import BUY_BUTTON, SELL_BUTTON, UNKNOWN_ACTION
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


START_COMMAND = "/start"


def is_start_command(text: str) -> bool:
    """True for ``/start``, ``/start@BotName`` and ``/start <payload>``."""
    words = text.split()
    if not words:
        return False
    return words[0].split("@", 1)[0] == START_COMMAND


def message_to_event(message: Message) -> Optional[ConversationEvent]:
    """
    Translate a user message into a conversation event.

    Returns:
        The event, or None for message types the bot does not handle
    """
    user_id = message.chat_id
    text = message.text

    if text is not None:
        stripped = text.strip()
        if is_start_command(stripped):
            return StartCommand(user_id=user_id)
        if stripped == BUY_BUTTON:
            return SelectBuy(user_id=user_id)
        if stripped == SELL_BUTTON:
            return SelectSell(user_id=user_id)
        return TextMessage(user_id=user_id, text=text)

    if message.photo:
        # Sizes are ordered smallest to largest
        photo = message.photo[-1]
        sender = message.from_user
        return PhotoUpload(
            user_id=user_id,
            image_ref=photo.file_id,
            display_name=(sender.first_name if sender else None) or "User",
            handle=(sender.username if sender else None) or "N/A",
        )

    return None


def callback_to_decision(callback_query: CallbackQuery) -> Optional[ButtonDecision]:
    """Translate an inline button press into a decision event."""
    parsed = parse_decision_data(callback_query.data)
    if parsed is None or callback_query.message is None:
        return None

    verb, order_id = parsed
    message = callback_query.message
    return ButtonDecision(
        caller_id=message.chat_id,
        verb=verb,
        order_id=order_id,
        message_id=message.message_id,
        caption=getattr(message, "caption", None) or "",
        callback_query_id=callback_query.id,
    )


class TelegramHandler:
    """
    Handles incoming Telegram updates and routes them to the conversation
    or approval handler.
    """

    def __init__(
        self,
        bot: Bot,
        conversation_handler: ConversationHandler,
        approval_handler: ApprovalHandler,
    ):
        """
        Initialize the Telegram handler.

        Args:
            bot: Telegram Bot instance
            conversation_handler: Runs the buy conversation
            approval_handler: Runs approver decisions
        """
        self.bot = bot
        self.conversation_handler = conversation_handler
        self.approval_handler = approval_handler
        logger.info("TelegramHandler initialized")

    async def process_update(self, update_data: Dict[str, Any]):
        """
        Process incoming Telegram update.

        Args:
            update_data: Raw update data from Telegram
        """
        try:
            update = Update.de_json(update_data, self.bot)

            if not update:
                logger.warning("Failed to parse update data")
                return

            if update.message:
                await self.handle_message(update.message)
            elif update.callback_query:
                await self.handle_callback_query(update.callback_query)
            else:
                logger.debug(f"Unhandled update type: {update.update_id}")

        except Exception as e:
            logger.error(
                "Error processing update", extra={"error": str(e)}, exc_info=True
            )

    async def handle_message(self, message: Message):
        """
        Handle an incoming user message.

        Args:
            message: Telegram Message object
        """
        event = message_to_event(message)

        logger.info(
            "Received message",
            extra={
                "user_id": message.chat_id,
                "event": event.kind if event else None,
            },
        )

        if event is None:
            logger.debug(f"Unhandled message type from chat {message.chat_id}")
            return

        await self.conversation_handler.handle_event(event)

    async def handle_callback_query(self, callback_query: CallbackQuery):
        """
        Handle callback queries from inline buttons.

        Args:
            callback_query: Telegram CallbackQuery object
        """
        logger.info(
            "Received callback query",
            extra={"callback_query_id": callback_query.id, "data": callback_query.data},
        )

        decision = callback_to_decision(callback_query)
        if decision is None:
            try:
                await self.bot.answer_callback_query(
                    callback_query_id=callback_query.id, text=UNKNOWN_ACTION
                )
            except TelegramError as e:
                logger.error(
                    "Telegram error answering callback query",
                    extra={"error": str(e)},
                )
            return

        await self.approval_handler.handle_decision(decision)
