from abc import abstractmethod

from hotel_reservation.loyalty.domain.entity import LoyaltyAccount, PointsTransaction
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, Repository, UserId


class LoyaltyRepository(Repository[LoyaltyAccount, UserId]):
    """ロイヤルティ口座と取引台帳のリポジトリ"""

    @abstractmethod
    def append_transaction(self, transaction: PointsTransaction) -> bool:
        """取引の追記と残高の更新を 1 つのトランザクションで行う

        - 口座が無ければ作成する
        - 同じIDの取引が既にあれば何もせず False を返す
        - REDEEM は残高が足りない場合 InsufficientPointsException を送出する
        """
        raise NotImplementedError

    @abstractmethod
    def find_transaction(
        self, user_id: UserId, transaction_id: PointsTransactionId
    ) -> PointsTransaction | None:
        raise NotImplementedError

    @abstractmethod
    def find_transactions(self, user_id: UserId) -> list[PointsTransaction]:
        """口座の全取引を返す（順序は保証しない）"""
        raise NotImplementedError

    @abstractmethod
    def link_booking(
        self,
        user_id: UserId,
        transaction_id: PointsTransactionId,
        booking_id: BookingId,
    ) -> None:
        raise NotImplementedError
