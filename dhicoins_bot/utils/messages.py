"""
User- and approver-facing message texts.
"""

from datetime import datetime

from dhicoins_bot.models.order import PendingOrder
from dhicoins_bot.models.session import ConvertedAmount


BUY_BUTTON = "Buy USDT"
SELL_BUTTON = "Sell USDT"

WELCOME = "🌟 Welcome to Dhicoins USDT Bot\n\nChoose an option below:"

SELL_COMING_SOON = "🔄 Sell USDT feature coming soon!"

AMOUNT_PROMPT = (
    "💵 Enter the amount you'd like to buy in USDT or MVR.\n\n"
    "Examples:\n"
    "• 100 USDT\n"
    "• 1500 MVR\n"
    "• 0.5 USDT\n"
    "• half USDT\n"
    "• one and a half MVR\n\n"
    "The equivalent will be displayed automatically."
)

INVALID_AMOUNT = (
    "❌ Invalid amount format.\n\n"
    "Please enter a valid amount like:\n"
    "• 100 USDT\n"
    "• 1500 MVR\n"
    "• 0.5 USDT"
)

INVALID_WALLET = (
    "❌ Invalid TRC20 wallet address.\n\n"
    "Please enter a valid TRC20 address (starts with T and 34 characters long)."
)

BANK_PROMPT = "🏦 Please enter your bank name for MVR transfer verification."

INVALID_BANK = "❌ Please enter a valid bank name."

SUBMISSION_FAILED = (
    "❌ An error occurred while submitting your order. "
    "Please try again or contact support."
)

UNAUTHORIZED = "⛔ Unauthorized"
ORDER_NOT_FOUND = "❌ Order not found or already processed"
UNKNOWN_ACTION = "❌ Unknown action"
APPROVAL_FAILED = "❌ Error processing approval"
REJECTION_FAILED = "❌ Error processing rejection"
ORDER_REJECTED_ACK = "❌ Order rejected"

APPROVED_MARK = "\n\n✅ APPROVED"
REJECTED_MARK = "\n\n❌ REJECTED"

# Telegram measures captions in UTF-16 code units
MAX_CAPTION_LENGTH = 1024
MAX_FIELD_LENGTH = 100
ELLIPSIS = "…"


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def clip(text: str, limit: int) -> str:
    """Shorten ``text`` to at most ``limit`` UTF-16 units, ending with an ellipsis."""
    if utf16_length(text) <= limit:
        return text
    budget = max(limit - utf16_length(ELLIPSIS), 0)
    # A surrogate pair split at the boundary is dropped whole
    head = text.encode("utf-16-le")[: budget * 2].decode("utf-16-le", errors="ignore")
    return head + ELLIPSIS


def annotated_caption(caption: str, mark: str) -> str:
    """Append a decision mark, shortening the caption so the result still fits."""
    return clip(caption, MAX_CAPTION_LENGTH - utf16_length(mark)) + mark


def amount_summary(converted: ConvertedAmount) -> str:
    return (
        "💰 Amount Summary:\n\n"
        f"USDT: {converted.usdt}\n"
        f"MVR: {converted.mvr}\n\n"
        "📋 Please enter your TRC20 USDT wallet address to receive the funds."
    )


def payment_instructions(
    account_name: str, bank_name: str, account_number: str, mvr_amount: str
) -> str:
    return (
        "💳 Bank Details for Payment:\n\n"
        f"Account Name: {account_name}\n"
        f"Bank: {bank_name}\n"
        f"Account Number: {account_number}\n\n"
        f"Amount to transfer: {mvr_amount} MVR\n\n"
        "📸 After making the payment, please upload your payment receipt/screenshot."
    )


def format_timestamp(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def new_order_caption(order: PendingOrder) -> str:
    """
    Caption of the receipt photo sent to the approver.

    Free-text fields are shortened, and the whole caption leaves room for
    the decision mark added when the order is approved or rejected.
    """
    caption = (
        "🔔 NEW BUY ORDER\n\n"
        f"Order ID: {order.order_id}\n"
        f"User: {clip(order.user_display_name, MAX_FIELD_LENGTH)} "
        f"(@{clip(order.user_handle, MAX_FIELD_LENGTH)})\n"
        f"User ID: {order.user_id}\n\n"
        "💵 Amount:\n"
        f"USDT: {order.usdt_amount}\n"
        f"MVR: {order.mvr_amount}\n\n"
        f"📋 Wallet: {order.wallet_address}\n"
        f"🏦 Bank: {clip(order.bank_name, MAX_FIELD_LENGTH)}\n\n"
        f"⏰ {format_timestamp(order.created_at)}"
    )
    mark_length = max(utf16_length(APPROVED_MARK), utf16_length(REJECTED_MARK))
    return clip(caption, MAX_CAPTION_LENGTH - mark_length)


def order_submitted(order_id: str) -> str:
    return (
        "✅ Order submitted successfully!\n\n"
        f"Order ID: {order_id}\n\n"
        "Your order is being reviewed by our admin. "
        "You will receive a notification once it's processed.\n\n"
        "Thank you for using Dhicoins! 🚀"
    )


def order_approved(order: PendingOrder, admin_wallet: str) -> str:
    return (
        "✅ YOUR ORDER HAS BEEN APPROVED!\n\n"
        f"Order ID: {order.order_id}\n"
        f"Amount: {order.usdt_amount} USDT\n\n"
        "💸 USDT Transfer Details:\n"
        f"You will receive {order.usdt_amount} USDT to:\n"
        f"{order.wallet_address}\n\n"
        "⚡ Admin is processing your transfer now.\n"
        "Please check your wallet in a few minutes.\n\n"
        "📝 Instructions for Admin:\n"
        f"Send {order.usdt_amount} USDT from admin wallet:\n"
        f"{admin_wallet}\n"
        "To user wallet:\n"
        f"{order.wallet_address}\n\n"
        "Thank you for choosing Dhicoins! 🌟"
    )


def order_approved_ack(order: PendingOrder) -> str:
    return f"✅ Order approved! Please send {order.usdt_amount} USDT to {order.wallet_address}"


def order_rejected(order: PendingOrder) -> str:
    return (
        "❌ ORDER REJECTED\n\n"
        f"Order ID: {order.order_id}\n"
        f"Amount: {order.usdt_amount} USDT\n\n"
        "Your order has been rejected. This may be due to:\n"
        "• Invalid payment receipt\n"
        "• Incorrect amount transferred\n"
        "• Other verification issues\n\n"
        "Please contact support for more information or try again."
    )
