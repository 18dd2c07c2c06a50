"""
Approver decisions on pending orders.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from dhicoins_bot.models.actions import (
    AnswerCallback,
    EditCaption,
    InlineButton,
    Keyboard,
    OutboundAction,
    SendText,
)
from dhicoins_bot.models.events import ButtonDecision, DecisionVerb
from dhicoins_bot.models.order import PendingOrder
from dhicoins_bot.services.order_store import OrderStore
from dhicoins_bot.utils import messages
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


CALLBACK_SEPARATOR = ":"


def decision_callback_data(verb: DecisionVerb, order_id: str) -> str:
    """Callback data carried by an Approve/Reject button."""
    return f"{verb.value}{CALLBACK_SEPARATOR}{order_id}"


def parse_decision_data(data: Optional[str]) -> Optional[Tuple[DecisionVerb, str]]:
    """
    Split ``approve:<order_id>`` / ``reject:<order_id>`` callback data.

    Returns:
        (verb, order_id), or None for anything else
    """
    if not data or CALLBACK_SEPARATOR not in data:
        return None

    verb, order_id = data.split(CALLBACK_SEPARATOR, 1)
    try:
        return DecisionVerb(verb), order_id
    except ValueError:
        return None


def decision_buttons(order_id: str) -> List[InlineButton]:
    return [
        InlineButton(
            text="✅ Approve",
            callback_data=decision_callback_data(DecisionVerb.APPROVE, order_id),
        ),
        InlineButton(
            text="❌ Reject",
            callback_data=decision_callback_data(DecisionVerb.REJECT, order_id),
        ),
    ]


class DecisionOutcome(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"


@dataclass
class Decision:
    """
    What to send for one approver decision.

    ``actions`` are sent in order; if any fails ``fallback`` is sent
    instead of ``followups``. The order has already left the store either way.
    """

    outcome: DecisionOutcome
    order: Optional[PendingOrder] = None
    actions: List[OutboundAction] = field(default_factory=list)
    followups: List[OutboundAction] = field(default_factory=list)
    fallback: List[OutboundAction] = field(default_factory=list)


class ApprovalFlow:
    """
    Applies Approve/Reject decisions to the order store.

    Each order is decided at most once: the store entry is taken in a single
    step, and a later decision on the same ID reports "not found".
    """

    def __init__(self, order_store: OrderStore, approver_chat_id: int, admin_wallet: str):
        self.order_store = order_store
        self.approver_chat_id = approver_chat_id
        self.admin_wallet = admin_wallet

    def decide(self, event: ButtonDecision) -> Decision:
        """
        Resolve a decision event.

        Args:
            event: Button press from the approver chat

        Returns:
            Decision with the outcome and messages to send
        """
        if event.caller_id != self.approver_chat_id:
            logger.warning(
                "Unauthorized decision attempt",
                extra={"caller_id": event.caller_id, "order_id": event.order_id},
            )
            return Decision(
                outcome=DecisionOutcome.UNAUTHORIZED,
                actions=self._ack(event, messages.UNAUTHORIZED),
            )

        order = self.order_store.take(event.order_id)
        if order is None:
            return Decision(
                outcome=DecisionOutcome.NOT_FOUND,
                actions=self._ack(event, messages.ORDER_NOT_FOUND),
            )

        if event.verb == DecisionVerb.APPROVE:
            decision = Decision(
                outcome=DecisionOutcome.APPROVED,
                order=order,
                actions=[
                    SendText(
                        chat_id=order.user_id,
                        text=messages.order_approved(order, self.admin_wallet),
                    ),
                    *self._annotate(event, messages.APPROVED_MARK),
                ],
                followups=self._ack(event, messages.order_approved_ack(order)),
                fallback=self._ack(event, messages.APPROVAL_FAILED),
            )
        else:
            decision = Decision(
                outcome=DecisionOutcome.REJECTED,
                order=order,
                actions=[
                    SendText(
                        chat_id=order.user_id,
                        text=messages.order_rejected(order),
                        keyboard=Keyboard.MAIN_MENU,
                    ),
                    *self._annotate(event, messages.REJECTED_MARK),
                ],
                followups=self._ack(event, messages.ORDER_REJECTED_ACK),
                fallback=self._ack(event, messages.REJECTION_FAILED),
            )

        logger.info(
            "Order decided",
            extra={
                "order_id": order.order_id,
                "user_id": order.user_id,
                "outcome": decision.outcome.value,
            },
        )
        return decision

    def _annotate(self, event: ButtonDecision, mark: str) -> List[OutboundAction]:
        if event.message_id is None:
            return []
        return [
            EditCaption(
                chat_id=event.caller_id,
                message_id=event.message_id,
                caption=messages.annotated_caption(event.caption, mark),
            )
        ]

    @staticmethod
    def _ack(event: ButtonDecision, text: str) -> List[OutboundAction]:
        if not event.callback_query_id:
            return []
        return [AnswerCallback(callback_query_id=event.callback_query_id, text=text)]
