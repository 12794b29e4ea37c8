from datetime import datetime

from hotel_reservation.loyalty.domain.entity.points_transaction import (
    PointsTransaction,
)
from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.shared.domain import AggregateRoot, UserId
from hotel_reservation.shared.domain.exception import InsufficientPointsException


class LoyaltyAccount(AggregateRoot[UserId]):
    """ロイヤルティ口座

    ユーザーごとに 1 つ。残高は取引の追記と同じトランザクションで更新する。
    取消（REVOCATION）は使用済みポイントに対しても行うため、残高は負になり得る。
    """

    def __init__(
        self,
        id: UserId,
        points_balance: int = 0,
        total_points_earned: int = 0,
        last_updated: datetime | None = None,
    ) -> None:
        super().__init__(id)
        self._points_balance = points_balance
        self._total_points_earned = total_points_earned
        self._last_updated = last_updated

    @property
    def user_id(self) -> UserId:
        return self._id

    @property
    def points_balance(self) -> int:
        return self._points_balance

    @property
    def total_points_earned(self) -> int:
        return self._total_points_earned

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    def can_redeem(self, points: int) -> bool:
        return 0 < points <= self._points_balance

    def apply(self, transaction: PointsTransaction) -> None:
        """取引を口座に反映する"""
        if transaction.user_id != self._id:
            raise ValueError("Transaction belongs to another account")
        if transaction.kind == TransactionKind.REDEEM and not self.can_redeem(
            -transaction.points
        ):
            raise InsufficientPointsException(
                f"Insufficient points. Available: {self._points_balance}, "
                f"Requested: {-transaction.points}"
            )
        self._points_balance += transaction.points
        if transaction.kind == TransactionKind.EARN:
            self._total_points_earned += transaction.points
        self._last_updated = transaction.created_at
