"""環境変数から読み込む設定値

Lambda の環境変数（CDK の Functions Construct で設定）を唯一の設定ソースとする。
テストではコンストラクタに直接値を渡す。
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal


def _env_decimal(name: str, default: str) -> Decimal:
    return Decimal(os.getenv(name, default))


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BookingSettings:
    """予約の業務ルール"""

    currency: str = "USD"
    max_guests: int = 10
    max_nights: int = 30
    max_advance_days: int = 365

    @classmethod
    def from_env(cls) -> BookingSettings:
        return cls(
            currency=os.getenv("BOOKING_CURRENCY", "USD"),
            max_guests=_env_int("BOOKING_MAX_GUESTS", 10),
            max_nights=_env_int("BOOKING_MAX_NIGHTS", 30),
            max_advance_days=_env_int("BOOKING_MAX_ADVANCE_DAYS", 365),
        )


@dataclass(frozen=True)
class LoyaltySettings:
    """ロイヤルティプログラムの設定

    points_percentage: 支払額に対する付与率（0.10 = 10%）
    point_value: 1 ポイントあたりの割引額
    points_quantum / money_quantum: 四捨五入の単位
    """

    points_percentage: Decimal = Decimal("0.10")
    minimum_points: int = 0
    maximum_points: int | None = None
    point_value: Decimal = Decimal("1")
    points_quantum: Decimal = Decimal("1")
    money_quantum: Decimal = Decimal("1")

    @classmethod
    def from_env(cls) -> LoyaltySettings:
        return cls(
            points_percentage=_env_decimal("LOYALTY_POINTS_PERCENTAGE", "0.10"),
            minimum_points=_env_int("LOYALTY_MINIMUM_POINTS", 0),
            maximum_points=_env_optional_int("LOYALTY_MAXIMUM_POINTS"),
            point_value=_env_decimal("LOYALTY_POINT_VALUE", "1"),
            points_quantum=_env_decimal("LOYALTY_POINTS_QUANTUM", "1"),
            money_quantum=_env_decimal("LOYALTY_MONEY_QUANTUM", "1"),
        )


@dataclass(frozen=True)
class PaymentSettings:
    """模擬決済ゲートウェイの設定"""

    charge_success_rate: float = 0.9
    refund_success_rate: float = 0.95
    charge_delay_seconds: float = 1.0
    refund_delay_seconds: float = 0.5
    reverse_redemption_on_payment_failure: bool = False

    @classmethod
    def from_env(cls) -> PaymentSettings:
        return cls(
            charge_success_rate=float(os.getenv("PAYMENT_CHARGE_SUCCESS_RATE", "0.9")),
            refund_success_rate=float(
                os.getenv("PAYMENT_REFUND_SUCCESS_RATE", "0.95")
            ),
            charge_delay_seconds=float(os.getenv("PAYMENT_CHARGE_DELAY_SECONDS", "1.0")),
            refund_delay_seconds=float(
                os.getenv("PAYMENT_REFUND_DELAY_SECONDS", "0.5")
            ),
            reverse_redemption_on_payment_failure=_env_bool(
                "PAYMENT_REVERSE_REDEMPTION_ON_FAILURE", False
            ),
        )
