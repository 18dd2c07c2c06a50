"""
Delivers outbound actions through the Telegram Bot API.
"""

from typing import Iterable, Optional
from telegram import (
    Bot,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
)
from telegram.error import TelegramError

from dhicoins_bot.models.actions import (
    AnswerCallback,
    EditCaption,
    InlineButton,
    Keyboard,
    OutboundAction,
    SendPhoto,
    SendText,
)
from dhicoins_bot.utils.messages import BUY_BUTTON, SELL_BUTTON
from dhicoins_bot.logging_config import get_logger

logger = get_logger(__name__)


class DeliveryError(Exception):
    """Raised when Telegram refuses or fails an outbound call."""

    def __init__(self, action: OutboundAction, cause: Exception):
        super().__init__(f"Failed to deliver {action.kind}: {cause}")
        self.action = action
        self.cause = cause


def main_menu_markup() -> ReplyKeyboardMarkup:
    return ReplyKeyboardMarkup(
        [[KeyboardButton(BUY_BUTTON)], [KeyboardButton(SELL_BUTTON)]],
        resize_keyboard=True,
        is_persistent=True,
    )


def inline_markup(buttons: Iterable[InlineButton]) -> InlineKeyboardMarkup:
    """All buttons on one row; an empty list clears existing buttons."""
    row = [
        InlineKeyboardButton(text=button.text, callback_data=button.callback_data)
        for button in buttons
    ]
    return InlineKeyboardMarkup([row] if row else [])


class MessageDispatcher:
    """
    Maps transport-neutral actions onto Bot API calls.
    """

    def __init__(self, bot: Bot):
        """
        Initialize the dispatcher.

        Args:
            bot: Telegram Bot instance
        """
        self.bot = bot
        logger.info("MessageDispatcher initialized")

    async def deliver(self, action: OutboundAction) -> None:
        """
        Perform one action.

        Raises:
            DeliveryError: If the Telegram call fails
        """
        try:
            if isinstance(action, SendText):
                await self.bot.send_message(
                    chat_id=action.chat_id,
                    text=action.text,
                    reply_markup=self._keyboard(action.keyboard),
                )
            elif isinstance(action, SendPhoto):
                await self.bot.send_photo(
                    chat_id=action.chat_id,
                    photo=action.photo,
                    caption=action.caption,
                    reply_markup=inline_markup(action.buttons) if action.buttons else None,
                )
            elif isinstance(action, EditCaption):
                await self.bot.edit_message_caption(
                    chat_id=action.chat_id,
                    message_id=action.message_id,
                    caption=action.caption,
                    reply_markup=inline_markup([]),
                )
            elif isinstance(action, AnswerCallback):
                await self.bot.answer_callback_query(
                    callback_query_id=action.callback_query_id,
                    text=action.text,
                )
            else:
                raise TypeError(f"Unsupported action: {action!r}")

        except TelegramError as e:
            logger.error(
                f"Telegram error delivering {action.kind}: {e}",
                extra={"action": action.kind},
            )
            raise DeliveryError(action, e) from e

        logger.debug(f"Delivered {action.kind}")

    async def deliver_all(self, actions: Iterable[OutboundAction]) -> None:
        """
        Perform actions in order, stopping at the first failure.

        Raises:
            DeliveryError: From the first action that fails
        """
        for action in actions:
            await self.deliver(action)

    async def deliver_best_effort(self, actions: Iterable[OutboundAction]) -> bool:
        """
        Perform every action, logging failures instead of raising.

        Returns:
            True if all actions were delivered
        """
        delivered = True
        for action in actions:
            try:
                await self.deliver(action)
            except DeliveryError as e:
                logger.warning(str(e), extra={"action": action.kind})
                delivered = False
        return delivered

    @staticmethod
    def _keyboard(keyboard: Optional[Keyboard]) -> Optional[ReplyKeyboardMarkup]:
        if keyboard == Keyboard.MAIN_MENU:
            return main_menu_markup()
        return None
