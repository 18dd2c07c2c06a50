"""
Pending order model.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field


class PendingOrder(BaseModel):
    """
    A submitted buy order waiting for the approver's decision.

    The receipt is kept as the Telegram ``file_id`` only; the image itself
    stays on Telegram's servers.
    """

    order_id: str = Field(..., description="Unique order identifier")

    # Customer
    user_id: int = Field(..., description="Telegram user/chat ID")
    user_display_name: str = Field(default="User", description="First name")
    user_handle: str = Field(default="N/A", description="Telegram username")

    # Quote
    usdt_amount: str = Field(..., description="USDT amount, 2 fraction digits")
    mvr_amount: str = Field(..., description="MVR amount, 2 fraction digits")

    # Payout and payment details
    wallet_address: str = Field(..., description="Destination TRC20 wallet")
    bank_name: str = Field(..., description="Bank the user paid from")
    receipt_ref: str = Field(..., description="Telegram file ID of the receipt")

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the order was submitted",
    )

    class Config:
        json_schema_extra = {
            "example": {
                "order_id": "ORDER_1731230400000_123456789",
                "user_id": 123456789,
                "user_display_name": "Aisha",
                "user_handle": "aisha_mv",
                "usdt_amount": "100.00",
                "mvr_amount": "1538.46",
                "wallet_address": "TXYZabcdefghijklmnopqrstuvwxyz1234",
                "bank_name": "BML",
                "receipt_ref": "AgACAgIAAxkBAAIC...",
                "created_at": "2024-11-10T10:00:00+00:00",
            }
        }
