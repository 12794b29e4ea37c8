from datetime import datetime
from typing import TypedDict

from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.value_object import (
    GuestInfo,
    LoyaltyRedemption,
    StayPeriod,
)
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import BookingId, Money, UserId


class BookingDetails(TypedDict):
    """予約の入力データ"""

    hotel_id: str
    check_in_date: str
    check_out_date: str
    guest_count: int
    guest_name: str
    guest_email: str


class BookingFactory:
    """予約情報を生成するFactory"""

    def create(
        self,
        booking_id: BookingId,
        user_id: UserId | None,
        details: BookingDetails,
        base_amount: Money,
        created_at: datetime,
        redemption: LoyaltyRedemption | None = None,
    ) -> Booking:
        """新規予約のエンティティを作成する

        合計金額 = 基本料金 - 割引額（0 未満にはしない）
        """
        total = base_amount
        if redemption is not None:
            total = base_amount.deduct(redemption.discount)

        return Booking(
            id=booking_id,
            hotel_id=HotelId(value=details["hotel_id"]),
            user_id=user_id,
            stay_period=StayPeriod(
                check_in=details["check_in_date"],
                check_out=details["check_out_date"],
            ),
            guest=GuestInfo(
                name=details["guest_name"],
                email=details["guest_email"],
                count=details["guest_count"],
            ),
            total_amount=total,
            created_at=created_at,
            status=BookingStatus.CONFIRMED,
            redemption=redemption,
        )
