"""Tests for free-form amount parsing."""

from decimal import Decimal

import pytest

from dhicoins_bot.models.session import Currency
from dhicoins_bot.services.amount_parser import detect_currency, parse_amount


class TestWordAmounts:
    def test_one_and_a_half_mvr(self):
        parsed = parse_amount("one and a half MVR")
        assert parsed.amount == Decimal("1.5")
        assert parsed.currency == Currency.MVR

    def test_and_half_without_article(self):
        parsed = parse_amount("Three and half usdt")
        assert parsed.amount == Decimal("3.5")
        assert parsed.currency == Currency.USDT

    def test_half_usdt(self):
        parsed = parse_amount("half USDT")
        assert parsed.amount == Decimal("0.5")
        assert parsed.currency == Currency.USDT

    def test_quarter(self):
        assert parse_amount("quarter").amount == Decimal("0.25")

    def test_ten_mvr(self):
        parsed = parse_amount("  TEN mvr ")
        assert parsed.amount == Decimal("10")
        assert parsed.currency == Currency.MVR

    def test_first_word_number_wins(self):
        assert parse_amount("two or five usdt").amount == Decimal("2")

    def test_word_number_beats_digits(self):
        assert parse_amount("one, not 100").amount == Decimal("1")

    def test_word_inside_other_word_is_ignored(self):
        # "someone" contains "one" but is not a standalone token
        parsed = parse_amount("someone wants 20 usdt")
        assert parsed.amount == Decimal("20")


class TestNumericAmounts:
    def test_plain_number_defaults_to_usdt(self):
        parsed = parse_amount("100")
        assert parsed.amount == Decimal("100")
        assert parsed.currency == Currency.USDT

    def test_decimal_amount(self):
        assert parse_amount("0.5 USDT").amount == Decimal("0.5")

    def test_mvr_amount(self):
        parsed = parse_amount("1500 MVR")
        assert parsed.amount == Decimal("1500")
        assert parsed.currency == Currency.MVR

    def test_first_number_is_used(self):
        assert parse_amount("25 usdt or 30").amount == Decimal("25")

    def test_very_large_amount_is_accepted(self):
        parsed = parse_amount("999999999999 usdt")
        assert parsed.amount == Decimal("999999999999")


class TestRejected:
    @pytest.mark.parametrize(
        "text",
        ["0 USDT", "0.00", "-5 usdt", "-12.5 mvr", "usdt", "hello there", "", "   "],
    )
    def test_returns_none(self, text):
        assert parse_amount(text) is None

    def test_none_input(self):
        assert parse_amount(None) is None


def test_detect_currency_is_case_insensitive():
    assert detect_currency("100 Mvr") == Currency.MVR
    assert detect_currency("100 dollars") == Currency.USDT
