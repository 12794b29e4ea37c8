from decimal import Decimal

import pytest

from hotel_reservation.shared.domain import Currency, Money


class TestMoney:
    def test_converts_amount_to_decimal(self):
        money = Money(amount="150.50", currency=Currency.usd())
        assert money.amount == Decimal("150.50")

    def test_negative_amount_is_rejected(self):
        with pytest.raises(ValueError):
            Money(amount=Decimal("-1"), currency=Currency.usd())

    def test_multiply_by_nights(self):
        assert Money.usd(Decimal("100")).multiply(2) == Money.usd(Decimal("200"))

    def test_deduct_discount(self):
        total = Money.usd(Decimal("200")).deduct(Money.usd(Decimal("50")))
        assert total == Money.usd(Decimal("150"))

    def test_deduct_never_goes_below_zero(self):
        """割引額が基本料金を超えても合計は 0"""
        total = Money.usd(Decimal("80")).deduct(Money.usd(Decimal("120")))
        assert total == Money.usd(Decimal("0"))

    def test_quantize_rounds_half_away_from_zero(self):
        assert Money.usd(Decimal("2.5")).quantize(Decimal("1")).amount == Decimal("3")
        assert Money.usd(Decimal("3.5")).quantize(Decimal("1")).amount == Decimal("4")

    def test_mixed_currencies_are_rejected(self):
        with pytest.raises(ValueError):
            Money.usd(Decimal("10")).add(Money.jpy(Decimal("10")))

    def test_equality_ignores_trailing_zeros(self):
        assert Money.usd(Decimal("150")) == Money.usd(Decimal("150.00"))


class TestCurrency:
    def test_code_is_normalized(self):
        assert str(Currency("usd")) == "USD"

    def test_unsupported_currency_is_rejected(self):
        with pytest.raises(ValueError):
            Currency("XYZ")
