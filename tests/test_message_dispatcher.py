"""Tests for mapping outbound actions onto Bot API calls."""

import pytest
from telegram import InlineKeyboardMarkup, ReplyKeyboardMarkup
from telegram.error import BadRequest

from dhicoins_bot.models.actions import (
    AnswerCallback,
    EditCaption,
    InlineButton,
    Keyboard,
    SendPhoto,
    SendText,
)
from dhicoins_bot.services.message_dispatcher import DeliveryError


@pytest.mark.asyncio
async def test_send_text_with_main_menu(dispatcher, mock_telegram_bot):
    await dispatcher.deliver(SendText(chat_id=1, text="hi", keyboard=Keyboard.MAIN_MENU))

    kwargs = mock_telegram_bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 1
    assert kwargs["text"] == "hi"
    markup = kwargs["reply_markup"]
    assert isinstance(markup, ReplyKeyboardMarkup)
    assert [row[0].text for row in markup.keyboard] == ["Buy USDT", "Sell USDT"]


@pytest.mark.asyncio
async def test_send_text_without_keyboard(dispatcher, mock_telegram_bot):
    await dispatcher.deliver(SendText(chat_id=1, text="hi"))

    assert mock_telegram_bot.send_message.await_args.kwargs["reply_markup"] is None


@pytest.mark.asyncio
async def test_send_photo_with_buttons(dispatcher, mock_telegram_bot):
    await dispatcher.deliver(
        SendPhoto(
            chat_id=-100,
            photo="file-id",
            caption="order",
            buttons=[
                InlineButton(text="✅ Approve", callback_data="approve:ORDER_1_2"),
                InlineButton(text="❌ Reject", callback_data="reject:ORDER_1_2"),
            ],
        )
    )

    markup = mock_telegram_bot.send_photo.await_args.kwargs["reply_markup"]
    assert isinstance(markup, InlineKeyboardMarkup)
    assert [b.callback_data for b in markup.inline_keyboard[0]] == [
        "approve:ORDER_1_2",
        "reject:ORDER_1_2",
    ]


@pytest.mark.asyncio
async def test_edit_caption_clears_buttons(dispatcher, mock_telegram_bot):
    await dispatcher.deliver(EditCaption(chat_id=-100, message_id=5, caption="done"))

    kwargs = mock_telegram_bot.edit_message_caption.await_args.kwargs
    assert kwargs["caption"] == "done"
    assert kwargs["reply_markup"].inline_keyboard == ()


@pytest.mark.asyncio
async def test_answer_callback(dispatcher, mock_telegram_bot):
    await dispatcher.deliver(AnswerCallback(callback_query_id="q", text="ok"))

    mock_telegram_bot.answer_callback_query.assert_awaited_once_with(
        callback_query_id="q", text="ok"
    )


@pytest.mark.asyncio
async def test_telegram_error_becomes_delivery_error(dispatcher, mock_telegram_bot):
    mock_telegram_bot.send_message.side_effect = BadRequest("chat not found")
    action = SendText(chat_id=1, text="hi")

    with pytest.raises(DeliveryError) as exc_info:
        await dispatcher.deliver(action)

    assert exc_info.value.action == action
    assert isinstance(exc_info.value.cause, BadRequest)


@pytest.mark.asyncio
async def test_best_effort_continues_after_failure(dispatcher, mock_telegram_bot):
    mock_telegram_bot.send_message.side_effect = BadRequest("chat not found")

    delivered = await dispatcher.deliver_best_effort(
        [SendText(chat_id=1, text="a"), AnswerCallback(callback_query_id="q", text="b")]
    )

    assert delivered is False
    mock_telegram_bot.answer_callback_query.assert_awaited_once()
