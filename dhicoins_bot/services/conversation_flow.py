"""
Buy conversation state machine.

``ConversationFlow.advance`` is a pure transition: it takes the user's current
session and an inbound event and returns the next session together with the
messages to send. It never touches Telegram or the stores.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, List, Optional

from dhicoins_bot.models.actions import Keyboard, OutboundAction, SendPhoto, SendText
from dhicoins_bot.models.events import (
    ConversationEvent,
    PhotoUpload,
    SelectBuy,
    SelectSell,
    StartCommand,
    TextMessage,
)
from dhicoins_bot.models.order import PendingOrder
from dhicoins_bot.models.session import BuyStep, Session, TradeAction
from dhicoins_bot.services.amount_parser import parse_amount
from dhicoins_bot.services.currency_converter import convert_amount
from dhicoins_bot.services.approval_flow import decision_buttons
from dhicoins_bot.utils import messages
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


WALLET_PREFIX = "T"
WALLET_LENGTH = 34
MIN_BANK_NAME_LENGTH = 2


def is_valid_wallet(address: str) -> bool:
    """TRC20-style shape check: leading "T" and 34 characters, no checksum."""
    return address.startswith(WALLET_PREFIX) and len(address) == WALLET_LENGTH


def is_valid_bank_name(name: str) -> bool:
    return len(name.strip()) >= MIN_BANK_NAME_LENGTH


@dataclass(frozen=True)
class PayeeDetails:
    """Bank account the user pays MVR into."""

    account_name: str
    bank_name: str
    account_number: str


@dataclass
class Transition:
    """
    Result of applying one event to a session.

    ``actions`` are sent first. When ``fallback`` is non-empty the transition
    is conditional: the session change and ``order`` only take effect if every
    action is delivered; otherwise ``fallback`` is sent instead. ``followups``
    are sent after a successful delivery, best effort.
    """

    session: Optional[Session]
    actions: List[OutboundAction] = field(default_factory=list)
    followups: List[OutboundAction] = field(default_factory=list)
    fallback: List[OutboundAction] = field(default_factory=list)
    order: Optional[PendingOrder] = None
    handled: bool = True

    @property
    def conditional(self) -> bool:
        return bool(self.fallback)


class ConversationFlow:
    """
    Advances a user through amount → wallet → bank → receipt.
    """

    def __init__(
        self,
        exchange_rate: Decimal,
        approver_chat_id: int,
        payee: PayeeDetails,
        order_id_factory: Callable[[int], str],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the flow.

        Args:
            exchange_rate: Fixed MVR-to-USDT rate for the process lifetime
            approver_chat_id: Chat that receives new orders
            payee: Bank details shown in the payment instructions
            order_id_factory: Builds a fresh order ID for a user ID
            clock: Returns the current time (UTC by default)
        """
        if exchange_rate <= 0:
            raise ValueError("exchange rate must be positive")

        self.exchange_rate = exchange_rate
        self.approver_chat_id = approver_chat_id
        self.payee = payee
        self.order_id_factory = order_id_factory
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def advance(self, session: Optional[Session], event: ConversationEvent) -> Transition:
        """
        Apply an inbound event to the user's session.

        Args:
            session: Current session, or None if the user is idle
            event: Inbound event

        Returns:
            Transition describing the next session and outbound messages
        """
        if isinstance(event, StartCommand):
            return Transition(
                session=None,
                actions=[self._reply(event.user_id, messages.WELCOME, menu=True)],
            )

        if isinstance(event, SelectBuy):
            return Transition(
                session=Session(user_id=event.user_id, action=TradeAction.BUY),
                actions=[self._reply(event.user_id, messages.AMOUNT_PROMPT)],
            )

        if isinstance(event, SelectSell):
            return Transition(
                session=session,
                actions=[self._reply(event.user_id, messages.SELL_COMING_SOON, menu=True)],
            )

        if session is None or session.action != TradeAction.BUY:
            return self._ignore(session, event)

        if isinstance(event, TextMessage):
            if session.step == BuyStep.AWAITING_AMOUNT:
                return self._on_amount(session, event)
            if session.step == BuyStep.AWAITING_WALLET:
                return self._on_wallet(session, event)
            if session.step == BuyStep.AWAITING_BANK:
                return self._on_bank(session, event)

        if isinstance(event, PhotoUpload) and session.step == BuyStep.AWAITING_RECEIPT:
            return self._on_receipt(session, event)

        return self._ignore(session, event)

    def _on_amount(self, session: Session, event: TextMessage) -> Transition:
        parsed = parse_amount(event.text)

        if parsed is None:
            return Transition(
                session=session,
                actions=[self._reply(event.user_id, messages.INVALID_AMOUNT)],
            )

        converted = convert_amount(parsed.amount, parsed.currency, self.exchange_rate)
        logger.info(
            "Amount accepted",
            extra={
                "user_id": event.user_id,
                "currency": parsed.currency.value,
                "usdt": converted.usdt,
                "mvr": converted.mvr,
            },
        )

        return Transition(
            session=session.advance(BuyStep.AWAITING_WALLET, converted=converted),
            actions=[self._reply(event.user_id, messages.amount_summary(converted))],
        )

    def _on_wallet(self, session: Session, event: TextMessage) -> Transition:
        wallet_address = event.text.strip()

        if not is_valid_wallet(wallet_address):
            return Transition(
                session=session,
                actions=[self._reply(event.user_id, messages.INVALID_WALLET)],
            )

        return Transition(
            session=session.advance(BuyStep.AWAITING_BANK, wallet_address=wallet_address),
            actions=[self._reply(event.user_id, messages.BANK_PROMPT)],
        )

    def _on_bank(self, session: Session, event: TextMessage) -> Transition:
        bank_name = event.text.strip()

        if not is_valid_bank_name(bank_name):
            return Transition(
                session=session,
                actions=[self._reply(event.user_id, messages.INVALID_BANK)],
            )

        instructions = messages.payment_instructions(
            account_name=self.payee.account_name,
            bank_name=self.payee.bank_name,
            account_number=self.payee.account_number,
            mvr_amount=session.converted.mvr,
        )

        return Transition(
            session=session.advance(BuyStep.AWAITING_RECEIPT, bank_name=bank_name),
            actions=[self._reply(event.user_id, instructions)],
        )

    def _on_receipt(self, session: Session, event: PhotoUpload) -> Transition:
        order = PendingOrder(
            order_id=self.order_id_factory(event.user_id),
            user_id=event.user_id,
            user_display_name=event.display_name,
            user_handle=event.handle,
            usdt_amount=session.converted.usdt,
            mvr_amount=session.converted.mvr,
            wallet_address=session.wallet_address,
            bank_name=session.bank_name,
            receipt_ref=event.image_ref,
            created_at=self.clock(),
        )

        notify_approver = SendPhoto(
            chat_id=self.approver_chat_id,
            photo=order.receipt_ref,
            caption=messages.new_order_caption(order),
            buttons=decision_buttons(order.order_id),
        )

        return Transition(
            session=None,
            actions=[notify_approver],
            followups=[self._reply(event.user_id, messages.order_submitted(order.order_id), menu=True)],
            fallback=[self._reply(event.user_id, messages.SUBMISSION_FAILED, menu=True)],
            order=order,
        )

    def _ignore(self, session: Optional[Session], event: ConversationEvent) -> Transition:
        logger.debug(
            "Event ignored in current step",
            extra={
                "user_id": event.user_id,
                "event": event.kind,
                "step": session.step.value if session else None,
            },
        )
        return Transition(session=session, handled=False)

    @staticmethod
    def _reply(chat_id: int, text: str, menu: bool = False) -> SendText:
        return SendText(
            chat_id=chat_id,
            text=text,
            keyboard=Keyboard.MAIN_MENU if menu else None,
        )
