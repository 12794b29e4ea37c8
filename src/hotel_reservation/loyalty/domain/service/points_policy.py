from decimal import ROUND_HALF_UP, Decimal

from hotel_reservation.shared.config import LoyaltySettings
from hotel_reservation.shared.domain import Currency, Money


class PointsPolicy:
    """ポイント付与・割引額の計算ルール

    付与ポイント = 支払額 × 付与率 を 0.5 切り上げ（0 から遠い方）で丸め、
    下限・上限で調整する。支払額が 0 の場合は下限を適用せず 0 とする。
    """

    def __init__(self, settings: LoyaltySettings) -> None:
        self._settings = settings

    def calculate_points(self, amount: Money) -> int:
        if amount.amount <= 0:
            return 0
        raw = amount.amount * self._settings.points_percentage
        points = int(raw.quantize(self._settings.points_quantum, rounding=ROUND_HALF_UP))
        points = max(points, self._settings.minimum_points)
        if self._settings.maximum_points is not None:
            points = min(points, self._settings.maximum_points)
        return points

    def calculate_discount(self, points: int, currency: Currency) -> Money:
        if points < 0:
            raise ValueError("Points cannot be negative")
        discount = Decimal(points) * self._settings.point_value
        return Money(amount=discount, currency=currency).quantize(
            self._settings.money_quantum
        )
