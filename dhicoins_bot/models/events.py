"""
Inbound events produced from Telegram updates.
"""

from enum import Enum
from typing import Literal, Optional, Union
from pydantic import BaseModel, Field


class DecisionVerb(str, Enum):
    """What the approver decided for an order."""

    APPROVE = "approve"
    REJECT = "reject"


class StartCommand(BaseModel):
    """User sent /start."""

    kind: Literal["start"] = "start"
    user_id: int


class SelectBuy(BaseModel):
    """User pressed the "Buy USDT" menu button."""

    kind: Literal["select_buy"] = "select_buy"
    user_id: int


class SelectSell(BaseModel):
    """User pressed the "Sell USDT" menu button."""

    kind: Literal["select_sell"] = "select_sell"
    user_id: int


class TextMessage(BaseModel):
    """Any other text from the user."""

    kind: Literal["text"] = "text"
    user_id: int
    text: str


class PhotoUpload(BaseModel):
    """User sent a photo; ``image_ref`` is the largest size's file ID."""

    kind: Literal["photo"] = "photo"
    user_id: int
    image_ref: str
    display_name: str = "User"
    handle: str = "N/A"


class ButtonDecision(BaseModel):
    """Approver pressed Approve or Reject under an order notification."""

    kind: Literal["decision"] = "decision"
    caller_id: int = Field(..., description="Chat the button message lives in")
    verb: DecisionVerb
    order_id: str
    message_id: Optional[int] = Field(None, description="Approver message ID")
    caption: str = Field(default="", description="Current caption of that message")
    callback_query_id: Optional[str] = None


ConversationEvent = Union[StartCommand, SelectBuy, SelectSell, TextMessage, PhotoUpload]
