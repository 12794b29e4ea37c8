from enum import Enum


class BookingStatus(str, Enum):
    """予約ステータス

    CONFIRMED から CANCELLED / COMPLETED への一方向にのみ遷移する。
    """

    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"
