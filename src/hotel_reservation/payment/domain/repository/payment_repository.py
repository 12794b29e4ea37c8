from abc import abstractmethod

from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId
from hotel_reservation.shared.domain import BookingId, Repository


class PaymentRepository(Repository[Payment, PaymentId]):
    """決済リポジトリのインターフェース"""

    @abstractmethod
    def save(self, payment: Payment) -> None:
        """決済を保存する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約IDに紐づく決済をすべて取得する"""
        raise NotImplementedError

    @abstractmethod
    def update(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済を更新する"""
        raise NotImplementedError
