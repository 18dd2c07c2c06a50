"""
Outbound actions requested by the conversation and approval flows.

The flows never call Telegram themselves; they describe what should be sent
and the ``MessageDispatcher`` performs it.
"""

from enum import Enum
from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field


class Keyboard(str, Enum):
    """Reply keyboards the bot can attach to a text message."""

    MAIN_MENU = "MAIN_MENU"


class InlineButton(BaseModel):
    """Inline button with callback data."""

    text: str
    callback_data: str


class SendText(BaseModel):
    kind: Literal["send_text"] = "send_text"
    chat_id: int
    text: str
    keyboard: Optional[Keyboard] = None


class SendPhoto(BaseModel):
    kind: Literal["send_photo"] = "send_photo"
    chat_id: int
    photo: str = Field(..., description="Telegram file ID")
    caption: str
    buttons: List[InlineButton] = Field(default_factory=list)


class EditCaption(BaseModel):
    """Replace a message caption and remove its inline buttons."""

    kind: Literal["edit_caption"] = "edit_caption"
    chat_id: int
    message_id: int
    caption: str


class AnswerCallback(BaseModel):
    kind: Literal["answer_callback"] = "answer_callback"
    callback_query_id: str
    text: str


OutboundAction = Union[SendText, SendPhoto, EditCaption, AnswerCallback]
