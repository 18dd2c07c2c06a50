"""
Parse free-form amount text such as "100 USDT", "1500 mvr" or
"one and a half MVR" into a positive amount and a currency.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from dhicoins_bot.models.session import Currency, ParsedAmount
from dhicoins_bot.logging_config import get_logger


logger = get_logger(__name__)


WORD_NUMBERS = {
    "half": Decimal("0.5"),
    "quarter": Decimal("0.25"),
    "one": Decimal("1"),
    "two": Decimal("2"),
    "three": Decimal("3"),
    "four": Decimal("4"),
    "five": Decimal("5"),
    "six": Decimal("6"),
    "seven": Decimal("7"),
    "eight": Decimal("8"),
    "nine": Decimal("9"),
    "ten": Decimal("10"),
}

_BASE_WORDS = "one|two|three|four|five|six|seven|eight|nine|ten"

# "two and a half", "two and half"
AND_HALF_PATTERN = re.compile(rf"\b({_BASE_WORDS})\s+and\s+(?:a\s+)?half\b")

# First standalone word number wins, by position in the text. "one half"
# therefore reads as 1; this ambiguity is accepted.
WORD_NUMBER_PATTERN = re.compile(
    r"\b(" + "|".join(WORD_NUMBERS) + r")\b"
)

# Digits with an optional fraction. A leading minus sign, or a digit/dot
# directly before the match, disqualifies it so "-5" is not read as 5.
NUMBER_PATTERN = re.compile(r"(?<![\d.\-])(\d+(?:\.\d+)?)")


def detect_currency(text: str) -> Currency:
    """MVR if the text mentions it anywhere, otherwise USDT."""
    return Currency.MVR if "mvr" in text.lower() else Currency.USDT


def parse_amount(text: Optional[str]) -> Optional[ParsedAmount]:
    """
    Parse user text into an amount and currency.

    Rules are tried in order: "<word> and a half", a standalone word number,
    then the first plain number. Non-positive amounts are rejected. No upper
    bound is applied.

    Args:
        text: Raw message text

    Returns:
        ParsedAmount, or None if no positive amount could be found
    """
    if not text:
        return None

    normalized = text.lower().strip()
    currency = detect_currency(normalized)

    match = AND_HALF_PATTERN.search(normalized)
    if match:
        amount = WORD_NUMBERS[match.group(1)] + Decimal("0.5")
        return ParsedAmount(amount=amount, currency=currency)

    match = WORD_NUMBER_PATTERN.search(normalized)
    if match:
        return ParsedAmount(amount=WORD_NUMBERS[match.group(1)], currency=currency)

    match = NUMBER_PATTERN.search(normalized)
    if not match:
        logger.debug("No amount found in text", extra={"text_length": len(text)})
        return None

    try:
        amount = Decimal(match.group(1))
    except InvalidOperation:
        return None

    if amount <= 0:
        logger.debug("Rejected non-positive amount", extra={"amount": str(amount)})
        return None

    return ParsedAmount(amount=amount, currency=currency)
