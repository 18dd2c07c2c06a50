"""Models module for the Dhicoins bot."""

from dhicoins_bot.models.session import (
    BuyStep,
    ConvertedAmount,
    Currency,
    ParsedAmount,
    Session,
    TradeAction,
)
from dhicoins_bot.models.order import PendingOrder
from dhicoins_bot.models.events import (
    ButtonDecision,
    ConversationEvent,
    DecisionVerb,
    PhotoUpload,
    SelectBuy,
    SelectSell,
    StartCommand,
    TextMessage,
)
from dhicoins_bot.models.actions import (
    AnswerCallback,
    EditCaption,
    InlineButton,
    Keyboard,
    OutboundAction,
    SendPhoto,
    SendText,
)


__all__ = [
    "BuyStep",
    "ConvertedAmount",
    "Currency",
    "ParsedAmount",
    "Session",
    "TradeAction",
    "PendingOrder",
    "ButtonDecision",
    "ConversationEvent",
    "DecisionVerb",
    "PhotoUpload",
    "SelectBuy",
    "SelectSell",
    "StartCommand",
    "TextMessage",
    "AnswerCallback",
    "EditCaption",
    "InlineButton",
    "Keyboard",
    "OutboundAction",
    "SendPhoto",
    "SendText",
]
