from datetime import datetime

from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, Entity, UserId

# 種別ごとのポイント増減の向き
_SIGNS: dict[TransactionKind, int] = {
    TransactionKind.EARN: 1,
    TransactionKind.REDEMPTION_REVERSAL: 1,
    TransactionKind.REDEEM: -1,
    TransactionKind.REVOCATION: -1,
}


class PointsTransaction(Entity[PointsTransactionId]):
    """ポイント取引（追記専用の台帳エントリ）

    points は符号付き。口座残高は全取引の points の合計と一致する。
    """

    def __init__(
        self,
        id: PointsTransactionId,
        user_id: UserId,
        kind: TransactionKind,
        points: int,
        description: str,
        created_at: datetime,
        booking_id: BookingId | None = None,
    ) -> None:
        super().__init__(id)
        if points == 0 or (points > 0) != (_SIGNS[kind] > 0):
            raise ValueError(f"Invalid points delta {points} for {kind.value}")
        self._user_id = user_id
        self._kind = kind
        self._points = points
        self._description = description
        self._created_at = created_at
        self._booking_id = booking_id

    @property
    def user_id(self) -> UserId:
        return self._user_id

    @property
    def kind(self) -> TransactionKind:
        return self._kind

    @property
    def points(self) -> int:
        return self._points

    @property
    def description(self) -> str:
        return self._description

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def booking_id(self) -> BookingId | None:
        return self._booking_id

    def link_to(self, booking_id: BookingId) -> None:
        """予約IDを後から紐づける（予約作成前に行った引き換え用）"""
        if self._booking_id is not None and self._booking_id != booking_id:
            raise ValueError("Transaction is already linked to another booking")
        self._booking_id = booking_id
