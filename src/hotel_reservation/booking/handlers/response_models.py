from __future__ import annotations

from pydantic import BaseModel

from hotel_reservation.booking.applications import (
    BookingResult,
    BookingView,
    CancellationResult,
    SettlementResult,
)
from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.payment.applications import PaymentResult


class BookingData(BaseModel):
    """予約データのレスポンスモデル"""

    booking_id: str
    hotel_id: str
    user_id: str | None
    check_in_date: str
    check_out_date: str
    nights: int
    guest_count: int
    guest_name: str
    guest_email: str
    total_amount: str
    currency: str
    points_redeemed: int | None = None
    discount_amount: str | None = None
    status: str
    created_at: str


class PaymentData(BaseModel):
    """決済・払い戻し結果のレスポンスモデル"""

    payment_id: str
    status: str
    amount: str
    currency: str
    transaction_id: str | None = None
    processed_at: str
    error_message: str | None = None


class CreateBookingData(BookingData):
    payment_required: bool


class BookingDetailData(BookingData):
    payment_id: str | None = None
    payment_status: str | None = None
    payment_required: bool
    points_earned: int


class SettlementData(BaseModel):
    booking: BookingData
    payment: PaymentData
    points_awarded: int


class CancellationData(BaseModel):
    booking: BookingData
    refund: PaymentData | None = None
    points_restored: int
    points_revoked: int


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: (
        CreateBookingData
        | BookingDetailData
        | SettlementData
        | CancellationData
    )


def _booking_fields(booking: Booking) -> dict:
    redemption = booking.redemption
    return {
        "booking_id": str(booking.id),
        "hotel_id": str(booking.hotel_id),
        "user_id": str(booking.user_id) if booking.user_id else None,
        "check_in_date": booking.stay_period.check_in,
        "check_out_date": booking.stay_period.check_out,
        "nights": booking.stay_period.nights(),
        "guest_count": booking.guest.count,
        "guest_name": booking.guest.name,
        "guest_email": booking.guest.email,
        "total_amount": str(booking.total_amount.amount),
        "currency": str(booking.total_amount.currency),
        "points_redeemed": redemption.points if redemption else None,
        "discount_amount": str(redemption.discount.amount) if redemption else None,
        "status": booking.status.value,
        "created_at": booking.created_at.isoformat(),
    }


def _payment_data(result: PaymentResult) -> PaymentData:
    return PaymentData(
        payment_id=str(result.payment_id),
        status=result.status.value,
        amount=str(result.amount.amount),
        currency=str(result.amount.currency),
        transaction_id=str(result.transaction_id) if result.transaction_id else None,
        processed_at=result.processed_at.isoformat(),
        error_message=result.error_message,
    )


def to_create_response(result: BookingResult) -> dict:
    return SuccessResponse(
        data=CreateBookingData(
            **_booking_fields(result.booking),
            payment_required=result.payment_required,
        )
    ).model_dump()


def to_detail_response(view: BookingView) -> dict:
    return SuccessResponse(
        data=BookingDetailData(
            **_booking_fields(view.booking),
            payment_id=str(view.payment_id) if view.payment_id else None,
            payment_status=view.payment_status.value if view.payment_status else None,
            payment_required=view.payment_required,
            points_earned=view.points_earned,
        )
    ).model_dump()


def to_settlement_response(result: SettlementResult) -> dict:
    return SuccessResponse(
        data=SettlementData(
            booking=BookingData(**_booking_fields(result.booking)),
            payment=_payment_data(result.payment),
            points_awarded=result.points_awarded,
        )
    ).model_dump()


def to_cancellation_response(result: CancellationResult) -> dict:
    return SuccessResponse(
        data=CancellationData(
            booking=BookingData(**_booking_fields(result.booking)),
            refund=_payment_data(result.refund) if result.refund else None,
            points_restored=result.points_restored,
            points_revoked=result.points_revoked,
        )
    ).model_dump()
