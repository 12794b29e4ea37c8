from abc import abstractmethod

from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import BookingId, Repository, UserId


class BookingRepository(Repository[Booking, BookingId]):
    """予約リポジトリ"""

    @abstractmethod
    def find_by_user_and_hotel(
        self, user_id: UserId, hotel_id: HotelId
    ) -> list[Booking]:
        """ユーザーの同一ホテルでの予約を返す（キャンセル済みを含む）"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """ステータスを更新する

        expected_status を指定した場合、現在のステータスが一致しなければ
        OptimisticLockException を送出する。
        """
        raise NotImplementedError
