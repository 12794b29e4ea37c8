from dataclasses import dataclass

from hotel_reservation.shared.domain import Money


@dataclass(frozen=True)
class LoyaltyRedemption:
    """予約に適用したポイント割引"""

    points: int
    discount: Money
    transaction_id: str

    def __post_init__(self) -> None:
        if self.points <= 0:
            raise ValueError("Redeemed points must be positive")
