"""
Per-user conversation session model for the buy flow.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class Currency(str, Enum):
    """Currencies the bot can quote."""

    USDT = "USDT"
    MVR = "MVR"


class TradeAction(str, Enum):
    """Which side of the exchange the user selected."""

    BUY = "buy"
    SELL = "sell"


class BuyStep(str, Enum):
    """
    Steps of the buy conversation, in the order they are completed.
    """

    # Waiting for "100 USDT", "1500 MVR", "half USDT" ...
    AWAITING_AMOUNT = "AWAITING_AMOUNT"

    # Waiting for the TRC20 wallet that receives the USDT
    AWAITING_WALLET = "AWAITING_WALLET"

    # Waiting for the name of the bank the MVR is sent from
    AWAITING_BANK = "AWAITING_BANK"

    # Waiting for the payment receipt photo
    AWAITING_RECEIPT = "AWAITING_RECEIPT"


class ParsedAmount(BaseModel):
    """Amount and currency recognised in free-form user text."""

    amount: Decimal = Field(..., gt=0, description="Positive quantity")
    currency: Currency = Field(..., description="Currency the quantity is in")


class ConvertedAmount(BaseModel):
    """Both sides of a quote, formatted with exactly two fraction digits."""

    usdt: str = Field(..., description="USDT amount, e.g. '6.50'")
    mvr: str = Field(..., description="MVR amount, e.g. '100.00'")


class Session(BaseModel):
    """
    In-progress buy conversation for one user.

    Fields are filled strictly in step order: ``converted`` once the amount
    step completes, ``wallet_address`` after the wallet step and
    ``bank_name`` after the bank step.
    """

    user_id: int = Field(..., description="Telegram user/chat ID")
    action: TradeAction = Field(default=TradeAction.BUY)
    step: BuyStep = Field(default=BuyStep.AWAITING_AMOUNT)

    converted: Optional[ConvertedAmount] = Field(
        None, description="Quote computed at the amount step"
    )
    wallet_address: Optional[str] = Field(
        None, description="Validated TRC20 wallet address"
    )
    bank_name: Optional[str] = Field(
        None, description="Bank the user pays MVR from"
    )

    def advance(self, step: BuyStep, **fields) -> "Session":
        """Return a copy moved to ``step`` with ``fields`` set."""
        return self.model_copy(update={"step": step, **fields})
