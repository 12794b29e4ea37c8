from __future__ import annotations

import uuid
from dataclasses import dataclass

from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.shared.domain import BookingId


@dataclass(frozen=True)
class PointsTransactionId:
    """ポイント取引ID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("PointsTransactionId cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_booking(
        cls, kind: TransactionKind, booking_id: BookingId
    ) -> PointsTransactionId:
        """予約に紐づく取引IDを生成する

        同じ予約・種別からは常に同じIDになるため、条件付き書き込みで
        二重付与・二重取消を防げる。
        """
        return cls(value=f"{kind.value.lower()}_for_{booking_id}")

    @classmethod
    def generate(cls) -> PointsTransactionId:
        return cls(value=f"txn-{uuid.uuid4().hex}")
