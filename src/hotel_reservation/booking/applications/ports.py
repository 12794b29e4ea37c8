"""予約ワークフローが依存する他コンテキストの窓口

オーケストレーターはストレージの型を知らず、ここに挙げた操作だけを使う。
"""

from typing import Protocol

from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.loyalty.applications import RedemptionResult
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.payment.applications import PaymentResult
from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentMethod
from hotel_reservation.payment.domain.value_object import PaymentId
from hotel_reservation.shared.domain import BookingId, Currency, Money, UserId


class RoomInventory(Protocol):
    def get_hotel(self, hotel_id: HotelId) -> Hotel: ...

    def reserve(self, hotel_id: HotelId) -> bool: ...

    def release(self, hotel_id: HotelId) -> None: ...


class PointsLedger(Protocol):
    def redeem(
        self, user_id: UserId, points: int, currency: Currency
    ) -> RedemptionResult: ...

    def link_redemption(
        self,
        user_id: UserId,
        transaction_id: PointsTransactionId,
        booking_id: BookingId,
    ) -> None: ...

    def reverse_redemption(
        self, user_id: UserId, booking_id: BookingId | None, points: int
    ) -> int: ...

    def award(
        self, user_id: UserId, booking_id: BookingId, paid_amount: Money
    ) -> int: ...

    def revoke_earned(self, user_id: UserId, booking_id: BookingId) -> int: ...

    def points_earned_for(self, user_id: UserId, booking_id: BookingId) -> int: ...


class PaymentProcessor(Protocol):
    def charge(
        self, booking_id: BookingId, amount: Money, method: PaymentMethod
    ) -> PaymentResult: ...

    def refund(self, payment_id: PaymentId, amount: Money) -> PaymentResult: ...

    def payments_for(self, booking_id: BookingId) -> list[Payment]: ...
