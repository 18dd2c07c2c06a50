"""
USDT/MVR conversion at the configured fixed rate.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext

from dhicoins_bot.models.session import ConvertedAmount, Currency


TWO_PLACES = Decimal("0.01")

# Digits kept beyond what the operands need, so division is exact to the cent
GUARD_DIGITS = 28


def precision_for(*values: Decimal) -> int:
    """Context precision large enough to multiply, divide and quantize ``values``."""
    return GUARD_DIGITS + sum(
        len(value.as_tuple().digits) + abs(value.adjusted()) for value in values
    )


def format_amount(value: Decimal) -> str:
    """Format with exactly two fraction digits, rounding half up."""
    with localcontext() as context:
        context.prec = precision_for(value)
        return str(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def convert_amount(amount: Decimal, currency: Currency, rate: Decimal) -> ConvertedAmount:
    """
    Compute both sides of a quote.

    ``rate`` is USDT per MVR (0.065 means 1 MVR buys 0.065 USDT). Amounts
    have no upper bound; precision grows with the operands.

    Args:
        amount: Quantity the user entered
        currency: Currency of ``amount``
        rate: Positive MVR-to-USDT rate

    Returns:
        ConvertedAmount with both values as 2-digit strings
    """
    if rate <= 0:
        raise ValueError("exchange rate must be positive")

    with localcontext() as context:
        context.prec = precision_for(amount, rate)

        if currency == Currency.MVR:
            return ConvertedAmount(
                usdt=format_amount(amount * rate), mvr=format_amount(amount)
            )

        return ConvertedAmount(
            usdt=format_amount(amount), mvr=format_amount(amount / rate)
        )
