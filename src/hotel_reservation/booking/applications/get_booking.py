from hotel_reservation.booking.applications.access import ensure_can_access
from hotel_reservation.booking.applications.booking_result import BookingView
from hotel_reservation.booking.applications.ports import PaymentProcessor, PointsLedger
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.shared.domain import BookingId, Caller
from hotel_reservation.shared.domain.exception import ResourceNotFoundException
from hotel_reservation.shared.utils import get_logger

logger = get_logger("booking-service")


class GetBookingService:
    """予約参照のユースケース（決済・付与ポイントは都度導出する）"""

    def __init__(
        self,
        repository: BookingRepository,
        payments: PaymentProcessor,
        loyalty: PointsLedger,
    ) -> None:
        self._repository = repository
        self._payments = payments
        self._loyalty = loyalty

    def get(self, booking_id: BookingId, caller: Caller) -> BookingView:
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(
                f"Booking with ID {booking_id} not found."
            )
        ensure_can_access(caller, booking, "You can only access your own bookings.")

        payments = self._payments.payments_for(booking.id)
        settled = [p for p in payments if p.is_settled()]
        # 成立した決済を優先し、無ければ最後に試行した決済を表示する
        latest = max(
            settled or payments,
            key=lambda p: p.processed_at.isoformat() if p.processed_at else "",
            default=None,
        )

        points_earned = 0
        if booking.user_id is not None:
            try:
                points_earned = self._loyalty.points_earned_for(
                    booking.user_id, booking.id
                )
            except Exception:
                logger.exception(
                    "Failed to look up earned points",
                    extra={"booking_id": str(booking.id)},
                )

        return BookingView(
            booking=booking,
            payment_id=latest.id if latest else None,
            payment_status=latest.status if latest else None,
            payment_required=(
                booking.status == BookingStatus.CONFIRMED and not settled
            ),
            points_earned=points_earned,
        )
