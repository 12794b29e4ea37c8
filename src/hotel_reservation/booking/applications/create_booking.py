from datetime import datetime, timezone
from typing import Callable

from hotel_reservation.booking.applications.booking_result import BookingResult
from hotel_reservation.booking.applications.booking_validator import BookingValidator
from hotel_reservation.booking.applications.ports import PointsLedger, RoomInventory
from hotel_reservation.booking.applications.saga import Saga
from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.factory import BookingDetails, BookingFactory
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.booking.domain.value_object import LoyaltyRedemption
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.loyalty.applications import RedemptionResult
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, Caller, UserId
from hotel_reservation.shared.domain.exception import NoRoomsAvailableException
from hotel_reservation.shared.utils import get_logger

logger = get_logger("booking-service")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CreateBookingService:
    """予約作成のユースケース

    ポイント引き換え → 客室確保 → 予約保存 の順に実行し、
    途中で失敗したら完了済みの手順を逆順に取り消す。
    """

    def __init__(
        self,
        repository: BookingRepository,
        factory: BookingFactory,
        validator: BookingValidator,
        inventory: RoomInventory,
        loyalty: PointsLedger,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._validator = validator
        self._inventory = inventory
        self._loyalty = loyalty
        self._clock = clock

    def create(
        self,
        details: BookingDetails,
        caller: Caller,
        points_to_redeem: int | None = None,
    ) -> BookingResult:
        """予約を作成する"""
        hotel_id = HotelId(value=details["hotel_id"])
        hotel = self._inventory.get_hotel(hotel_id)
        stay_period = self._validator.validate(
            details,
            hotel,
            caller.user_id,
            waive_limits=caller.waives_booking_limits,
            points_to_redeem=points_to_redeem,
        )
        base_amount = hotel.price_for(stay_period.nights())
        booking_id = BookingId.generate()
        user_id = caller.user_id

        logger.info(
            "Creating booking",
            extra={
                "booking_id": str(booking_id),
                "hotel_id": str(hotel_id),
                "base_amount": str(base_amount),
            },
        )

        with Saga("create-booking") as saga:
            redemption = None
            if points_to_redeem and user_id is not None:
                result = saga.execute(
                    "redeem-points",
                    lambda: self._loyalty.redeem(
                        user_id, points_to_redeem, base_amount.currency
                    ),
                    lambda r: self._loyalty.reverse_redemption(
                        user_id, booking_id, r.points_redeemed
                    ),
                )
                redemption = self._to_redemption(result)

            saga.execute(
                "reserve-room",
                lambda: self._reserve(hotel_id),
                lambda _: self._inventory.release(hotel_id),
            )

            booking = self._factory.create(
                booking_id=booking_id,
                user_id=user_id,
                details=details,
                base_amount=base_amount,
                created_at=self._clock(),
                redemption=redemption,
            )
            saga.execute("save-booking", lambda: self._repository.save(booking))

        if redemption is not None and user_id is not None:
            self._link_redemption(user_id, redemption, booking)

        logger.info(
            "Booking created",
            extra={
                "booking_id": str(booking.id),
                "total_amount": str(booking.total_amount),
            },
        )
        return BookingResult(booking=booking, payment_required=True)

    def _reserve(self, hotel_id: HotelId) -> None:
        if not self._inventory.reserve(hotel_id):
            raise NoRoomsAvailableException(
                "No rooms are currently available at this hotel."
            )

    def _to_redemption(self, result: RedemptionResult) -> LoyaltyRedemption:
        return LoyaltyRedemption(
            points=result.points_redeemed,
            discount=result.discount_amount,
            transaction_id=str(result.transaction_id),
        )

    def _link_redemption(
        self, user_id: UserId, redemption: LoyaltyRedemption, booking: Booking
    ) -> None:
        """引き換え取引に予約IDを紐づける（失敗しても予約は有効）"""
        try:
            self._loyalty.link_redemption(
                user_id,
                PointsTransactionId(value=redemption.transaction_id),
                booking.id,
            )
        except Exception:
            logger.exception(
                "Failed to link redemption to booking",
                extra={"booking_id": str(booking.id)},
            )
