from hotel_reservation.booking.applications.access import ensure_can_access
from hotel_reservation.booking.applications.booking_result import SettlementResult
from hotel_reservation.booking.applications.ports import (
    PaymentProcessor,
    PointsLedger,
    RoomInventory,
)
from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.payment.domain.enum import PaymentMethod
from hotel_reservation.shared.config import PaymentSettings
from hotel_reservation.shared.domain import BookingId, Caller, Money
from hotel_reservation.shared.domain.exception import (
    OptimisticLockException,
    ResourceNotFoundException,
    ValidationException,
)
from hotel_reservation.shared.utils import get_logger

logger = get_logger("booking-service")


class SettlePaymentService:
    """予約の決済のユースケース

    決済成功: 予約は CONFIRMED のまま、ポイントを付与する（失敗しても決済は有効）
    決済失敗: 予約をキャンセルし、客室を戻す
    """

    def __init__(
        self,
        repository: BookingRepository,
        payments: PaymentProcessor,
        inventory: RoomInventory,
        loyalty: PointsLedger,
        settings: PaymentSettings,
    ) -> None:
        self._repository = repository
        self._payments = payments
        self._inventory = inventory
        self._loyalty = loyalty
        self._settings = settings

    def settle(
        self,
        booking_id: BookingId,
        amount: Money,
        method: PaymentMethod,
        caller: Caller,
    ) -> SettlementResult:
        """予約の料金を決済する"""
        booking = self._repository.find_by_id(booking_id)
        if booking is None:
            raise ResourceNotFoundException(
                f"Booking with ID {booking_id} does not exist."
            )
        ensure_can_access(
            caller,
            booking,
            "You can only pay for your own bookings.",
            allow_admin=False,
        )
        self._validate(booking, amount)

        result = self._payments.charge(booking.id, amount, method)

        if result.is_completed:
            points = self._award_points(booking, amount)
            return SettlementResult(booking=booking, payment=result, points_awarded=points)

        logger.warning(
            "Payment failed, cancelling booking",
            extra={"booking_id": str(booking.id), "error": result.error_message},
        )
        self._cancel_unpaid(booking)
        return SettlementResult(booking=booking, payment=result)

    def _validate(self, booking: Booking, amount: Money) -> None:
        errors = []
        if booking.status == BookingStatus.CANCELLED:
            errors.append("Cannot process payment for a cancelled booking.")
        elif booking.status == BookingStatus.COMPLETED:
            errors.append("Cannot process payment for a completed booking.")

        if any(p.is_settled() for p in self._payments.payments_for(booking.id)):
            errors.append("Payment has already been processed for this booking.")

        if amount != booking.total_amount:
            errors.append(
                f"Payment amount ({amount}) does not match "
                f"booking total ({booking.total_amount})."
            )
        if errors:
            raise ValidationException(errors)

    def _award_points(self, booking: Booking, amount: Money) -> int:
        if booking.user_id is None:
            return 0
        try:
            return self._loyalty.award(booking.user_id, booking.id, amount)
        except Exception:
            logger.exception(
                "Failed to award loyalty points",
                extra={"booking_id": str(booking.id)},
            )
            return 0

    def _cancel_unpaid(self, booking: Booking) -> None:
        """決済失敗時の補償（ステータス更新に成功した場合のみ客室を戻す）"""
        booking.cancel()
        try:
            self._repository.update(booking, expected_status=BookingStatus.CONFIRMED)
        except OptimisticLockException:
            logger.warning(
                "Booking already changed by another request",
                extra={"booking_id": str(booking.id)},
            )
            return

        self._inventory.release(booking.hotel_id)

        if (
            self._settings.reverse_redemption_on_payment_failure
            and booking.user_id is not None
            and booking.points_redeemed > 0
        ):
            try:
                self._loyalty.reverse_redemption(
                    booking.user_id, booking.id, booking.points_redeemed
                )
            except Exception:
                logger.exception(
                    "Failed to reverse redeemed points",
                    extra={"booking_id": str(booking.id)},
                )
