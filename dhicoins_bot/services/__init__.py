"""Services module for the Dhicoins bot."""

from dhicoins_bot.services.amount_parser import parse_amount, detect_currency
from dhicoins_bot.services.currency_converter import convert_amount, format_amount
from dhicoins_bot.services.session_store import SessionStore
from dhicoins_bot.services.order_store import OrderStore, DuplicateOrderError
from dhicoins_bot.services.approval_flow import (
    ApprovalFlow,
    Decision,
    DecisionOutcome,
    decision_buttons,
    decision_callback_data,
    parse_decision_data,
)
from dhicoins_bot.services.conversation_flow import (
    ConversationFlow,
    PayeeDetails,
    Transition,
    is_valid_bank_name,
    is_valid_wallet,
)
from dhicoins_bot.services.message_dispatcher import MessageDispatcher, DeliveryError


__all__ = [
    "parse_amount",
    "detect_currency",
    "convert_amount",
    "format_amount",
    "SessionStore",
    "OrderStore",
    "DuplicateOrderError",
    "ApprovalFlow",
    "Decision",
    "DecisionOutcome",
    "decision_buttons",
    "decision_callback_data",
    "parse_decision_data",
    "ConversationFlow",
    "PayeeDetails",
    "Transition",
    "is_valid_bank_name",
    "is_valid_wallet",
    "MessageDispatcher",
    "DeliveryError",
]
