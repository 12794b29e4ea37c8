from hotel_reservation.booking.applications.access import ensure_can_access
from hotel_reservation.booking.applications.booking_result import CancellationResult
from hotel_reservation.booking.applications.ports import (
    PaymentProcessor,
    PointsLedger,
    RoomInventory,
)
from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.payment.applications import PaymentResult
from hotel_reservation.payment.domain.enum import PaymentStatus
from hotel_reservation.shared.domain import BookingId, Caller
from hotel_reservation.shared.domain.exception import (
    RefundFailedException,
    ResourceNotFoundException,
)
from hotel_reservation.shared.utils import get_logger

logger = get_logger("booking-service")


class CancelBookingService:
    """予約キャンセルのユースケース

    払い戻しに失敗した場合は何も変更せずに中断する。
    ポイントの戻し・取消はベストエフォートで、失敗してもキャンセルは続行する。
    """

    def __init__(
        self,
        repository: BookingRepository,
        payments: PaymentProcessor,
        inventory: RoomInventory,
        loyalty: PointsLedger,
    ) -> None:
        self._repository = repository
        self._payments = payments
        self._inventory = inventory
        self._loyalty = loyalty

    def cancel(self, booking_id: BookingId, caller: Caller) -> CancellationResult:
        """予約をキャンセルする"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(
                f"Booking with ID {booking_id} not found."
            )
        ensure_can_access(caller, booking, "You can only cancel your own bookings.")

        # 状態遷移の検証だけ先に行う（永続化は払い戻しの後）
        booking.cancel()

        payments = self._payments.payments_for(booking.id)
        paid = next(
            (p for p in payments if p.status == PaymentStatus.COMPLETED), None
        )
        # 前回のキャンセルが払い戻し後に中断していても獲得ポイントは取り消す
        earned = any(
            p.status in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED)
            for p in payments
        )
        refund: PaymentResult | None = None
        if paid is not None:
            refund = self._payments.refund(paid.id, paid.amount)
            if not refund.is_refunded:
                logger.warning(
                    "Refund failed, cancellation aborted",
                    extra={"booking_id": str(booking.id), "error": refund.error_message},
                )
                raise RefundFailedException(
                    f"Failed to process refund: {refund.error_message}"
                )

        # 条件付き更新に成功したリクエストだけが客室を戻す
        self._repository.update(booking, expected_status=BookingStatus.CONFIRMED)

        points_restored, points_revoked = self._settle_points(booking, earned=earned)
        self._inventory.release(booking.hotel_id)

        logger.info(
            "Booking cancelled",
            extra={
                "booking_id": str(booking.id),
                "refunded": refund is not None,
                "points_restored": points_restored,
                "points_revoked": points_revoked,
            },
        )
        return CancellationResult(
            booking=booking,
            refund=refund,
            points_restored=points_restored,
            points_revoked=points_revoked,
        )

    def _settle_points(self, booking: Booking, earned: bool) -> tuple[int, int]:
        if booking.user_id is None:
            return 0, 0

        restored = 0
        if booking.points_redeemed > 0:
            try:
                restored = self._loyalty.reverse_redemption(
                    booking.user_id, booking.id, booking.points_redeemed
                )
            except Exception:
                logger.exception(
                    "Failed to restore redeemed points",
                    extra={"booking_id": str(booking.id)},
                )

        revoked = 0
        if earned:
            try:
                revoked = self._loyalty.revoke_earned(booking.user_id, booking.id)
            except Exception:
                logger.exception(
                    "Failed to revoke earned points",
                    extra={"booking_id": str(booking.id)},
                )
        return restored, revoked
