from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.shared.domain import Caller
from hotel_reservation.shared.domain.exception import UnauthorizedException


def ensure_can_access(
    caller: Caller, booking: Booking, message: str, allow_admin: bool = True
) -> None:
    """予約に対する操作権限を確認する

    ゲスト予約（user_id なし）は予約IDを知っていれば操作できる。
    """
    if booking.user_id is None:
        return
    if caller.owns(booking.user_id):
        return
    if allow_admin and caller.can_manage_any_booking:
        return
    raise UnauthorizedException(message)
