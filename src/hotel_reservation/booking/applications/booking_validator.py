from datetime import date, datetime, timedelta, timezone
from typing import Callable

from hotel_reservation.booking.domain.factory import BookingDetails
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.booking.domain.value_object import StayPeriod
from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.shared.config import BookingSettings
from hotel_reservation.shared.domain import UserId
from hotel_reservation.shared.domain.exception import ValidationException


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class BookingValidator:
    """予約作成前の業務ルール検証

    副作用を起こす前にすべての違反を集め、1 つの ValidationException にまとめる。
    waive_limits は呼び出し元のロールから導出した権限フラグ。
    """

    def __init__(
        self,
        settings: BookingSettings,
        repository: BookingRepository,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._settings = settings
        self._repository = repository
        self._today = today

    def validate(
        self,
        details: BookingDetails,
        hotel: Hotel,
        user_id: UserId | None,
        waive_limits: bool,
        points_to_redeem: int | None = None,
    ) -> StayPeriod:
        errors: list[str] = []

        if not hotel.has_available_rooms():
            errors.append("No rooms are currently available at this hotel.")

        guest_count = details["guest_count"]
        if not 1 <= guest_count <= self._settings.max_guests:
            errors.append(
                f"Guest count must be between 1 and {self._settings.max_guests}."
            )

        if points_to_redeem and user_id is None:
            errors.append("You must be logged in to redeem loyalty points.")

        try:
            stay_period = StayPeriod(
                check_in=details["check_in_date"],
                check_out=details["check_out_date"],
            )
        except ValueError as e:
            errors.append(f"{e}.")
            raise ValidationException(errors) from e

        errors.extend(self._check_dates(stay_period, waive_limits))

        if not waive_limits and user_id is not None:
            if self._has_overlapping_booking(user_id, hotel, stay_period):
                errors.append(
                    "You already have a booking at this hotel that overlaps with "
                    "the requested dates. Please choose different dates or cancel "
                    "your existing booking first."
                )

        if errors:
            raise ValidationException(errors)
        return stay_period

    def _check_dates(self, stay_period: StayPeriod, waive_limits: bool) -> list[str]:
        errors = []
        today = self._today()

        if stay_period.check_in_date < today:
            errors.append("Check-in date cannot be in the past.")

        if waive_limits:
            return errors

        if stay_period.nights() > self._settings.max_nights:
            errors.append(
                f"Booking duration cannot exceed {self._settings.max_nights} days."
            )

        latest_check_in = today + timedelta(days=self._settings.max_advance_days)
        if stay_period.check_in_date > latest_check_in:
            errors.append(
                f"Bookings cannot be made more than "
                f"{self._settings.max_advance_days} days in advance."
            )
        return errors

    def _has_overlapping_booking(
        self, user_id: UserId, hotel: Hotel, stay_period: StayPeriod
    ) -> bool:
        return any(
            booking.is_active() and booking.stay_period.overlaps(stay_period)
            for booking in self._repository.find_by_user_and_hotel(user_id, hotel.id)
        )
