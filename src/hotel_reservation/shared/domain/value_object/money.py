from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .currency import Currency


@dataclass(frozen=True)
class Money:
    """金額（通貨情報含む）

    金額計算は常に Decimal の固定小数点で行い、float は使わない。
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def add(self, other: Money) -> Money:
        """金額を加算する"""
        self._ensure_same_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def multiply(self, factor: int) -> Money:
        """整数倍する（泊数 × 1 泊料金など）"""
        return Money(amount=self.amount * factor, currency=self.currency)

    def deduct(self, discount: Money) -> Money:
        """割引額を差し引く。結果は 0 未満にならない"""
        self._ensure_same_currency(discount)
        return Money(
            amount=max(Decimal("0"), self.amount - discount.amount),
            currency=self.currency,
        )

    def quantize(self, quantum: Decimal) -> Money:
        """指定の単位に四捨五入する（0.5 は 0 から遠い方へ）"""
        return Money(
            amount=self.amount.quantize(quantum, rounding=ROUND_HALF_UP),
            currency=self.currency,
        )

    def exceeds(self, other: Money) -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def _ensure_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValueError("Cannot operate on money with different currencies")

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(Decimal("0"), currency)

    @classmethod
    def jpy(cls, amount: Decimal) -> Money:
        """日本円で Money を生成"""
        return cls(amount, Currency.jpy())

    @classmethod
    def usd(cls, amount: Decimal) -> Money:
        """米ドルで Money を生成"""
        return cls(amount, Currency.usd())
