from datetime import datetime

from hotel_reservation.loyalty.domain.entity import PointsTransaction
from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, Money, UserId


class PointsTransactionFactory:
    """ポイント取引を生成するFactory

    予約に紐づく取引は予約IDから決定的なIDを持つ。
    """

    def earn(
        self, user_id: UserId, booking_id: BookingId, points: int, at: datetime
    ) -> PointsTransaction:
        return PointsTransaction(
            id=PointsTransactionId.for_booking(TransactionKind.EARN, booking_id),
            user_id=user_id,
            kind=TransactionKind.EARN,
            points=points,
            description=f"Points earned from booking #{booking_id}",
            created_at=at,
            booking_id=booking_id,
        )

    def redeem(
        self, user_id: UserId, points: int, discount: Money, at: datetime
    ) -> PointsTransaction:
        """予約作成前の引き換え（予約IDは後で紐づける）"""
        return PointsTransaction(
            id=PointsTransactionId.generate(),
            user_id=user_id,
            kind=TransactionKind.REDEEM,
            points=-points,
            description=f"Redeemed {points} points for {discount} discount",
            created_at=at,
        )

    def redemption_reversal(
        self,
        user_id: UserId,
        booking_id: BookingId | None,
        points: int,
        at: datetime,
    ) -> PointsTransaction:
        transaction_id = (
            PointsTransactionId.for_booking(
                TransactionKind.REDEMPTION_REVERSAL, booking_id
            )
            if booking_id is not None
            else PointsTransactionId.generate()
        )
        return PointsTransaction(
            id=transaction_id,
            user_id=user_id,
            kind=TransactionKind.REDEMPTION_REVERSAL,
            points=points,
            description=(
                f"Reversed {points} redeemed points for booking #{booking_id}"
                if booking_id is not None
                else f"Reversed {points} redeemed points"
            ),
            created_at=at,
            booking_id=booking_id,
        )

    def revocation(
        self, earned: PointsTransaction, at: datetime
    ) -> PointsTransaction:
        """付与済みポイントの取消（同じ量を差し引く）"""
        if earned.kind != TransactionKind.EARN or earned.booking_id is None:
            raise ValueError("Only booking-linked earn transactions can be revoked")
        return PointsTransaction(
            id=PointsTransactionId.for_booking(
                TransactionKind.REVOCATION, earned.booking_id
            ),
            user_id=earned.user_id,
            kind=TransactionKind.REVOCATION,
            points=-earned.points,
            description=f"Revoked points earned from booking #{earned.booking_id}",
            created_at=at,
            booking_id=earned.booking_id,
        )
