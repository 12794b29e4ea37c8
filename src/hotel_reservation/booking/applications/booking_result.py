from dataclasses import dataclass

from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.payment.applications import PaymentResult
from hotel_reservation.payment.domain.enum import PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId


@dataclass(frozen=True)
class BookingResult:
    """予約作成の結果"""

    booking: Booking
    payment_required: bool = True


@dataclass(frozen=True)
class SettlementResult:
    """決済の結果

    決済が失敗した場合、booking はキャンセル済みになっている。
    """

    booking: Booking
    payment: PaymentResult
    points_awarded: int = 0


@dataclass(frozen=True)
class CancellationResult:
    """キャンセルの結果（未決済の予約では refund は None）"""

    booking: Booking
    refund: PaymentResult | None = None
    points_restored: int = 0
    points_revoked: int = 0


@dataclass(frozen=True)
class BookingView:
    """予約の参照結果"""

    booking: Booking
    payment_id: PaymentId | None
    payment_status: PaymentStatus | None
    payment_required: bool
    points_earned: int
