from dataclasses import dataclass

from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import Money


@dataclass(frozen=True)
class RedemptionResult:
    """ポイント引き換えの結果"""

    points_redeemed: int
    discount_amount: Money
    remaining_balance: int
    transaction_id: PointsTransactionId
