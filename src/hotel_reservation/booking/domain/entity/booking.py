from datetime import datetime

from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.value_object import (
    GuestInfo,
    LoyaltyRedemption,
    StayPeriod,
)
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import AggregateRoot, BookingId, Money, UserId
from hotel_reservation.shared.domain.exception import BusinessRuleViolationException


class Booking(AggregateRoot[BookingId]):
    """予約エンティティ

    total_amount は割引適用後の金額。決済は予約IDから導出し、ここには持たない。
    """

    def __init__(
        self,
        id: BookingId,
        hotel_id: HotelId,
        user_id: UserId | None,
        stay_period: StayPeriod,
        guest: GuestInfo,
        total_amount: Money,
        created_at: datetime,
        status: BookingStatus = BookingStatus.CONFIRMED,
        redemption: LoyaltyRedemption | None = None,
    ) -> None:
        super().__init__(id)
        self._hotel_id = hotel_id
        self._user_id = user_id
        self._stay_period = stay_period
        self._guest = guest
        self._total_amount = total_amount
        self._created_at = created_at
        self._status = status
        self._redemption = redemption

    @property
    def hotel_id(self) -> HotelId:
        return self._hotel_id

    @property
    def user_id(self) -> UserId | None:
        return self._user_id

    @property
    def stay_period(self) -> StayPeriod:
        return self._stay_period

    @property
    def guest(self) -> GuestInfo:
        return self._guest

    @property
    def total_amount(self) -> Money:
        return self._total_amount

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def status(self) -> BookingStatus:
        return self._status

    @property
    def redemption(self) -> LoyaltyRedemption | None:
        return self._redemption

    @property
    def points_redeemed(self) -> int:
        return self._redemption.points if self._redemption else 0

    def is_active(self) -> bool:
        """キャンセルされていない予約か"""
        return self._status != BookingStatus.CANCELLED

    def cancel(self) -> None:
        """予約をキャンセルする"""
        if self._status == BookingStatus.CANCELLED:
            raise BusinessRuleViolationException("Booking is already cancelled.")
        if self._status == BookingStatus.COMPLETED:
            raise BusinessRuleViolationException("Cannot cancel a completed booking.")
        self._status = BookingStatus.CANCELLED

    def complete(self) -> None:
        """宿泊完了（外部プロセスから呼ばれる）"""
        if self._status != BookingStatus.CONFIRMED:
            raise BusinessRuleViolationException(
                f"Cannot complete booking in {self._status.value} status"
            )
        self._status = BookingStatus.COMPLETED
