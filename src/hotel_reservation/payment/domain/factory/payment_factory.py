from typing import TypedDict

from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId, TransactionId
from hotel_reservation.shared.domain import BookingId, Money


class PaymentDetails(TypedDict):
    """決済の入力データ構造（TypedDict）"""

    amount: Money
    method: PaymentMethod


class PaymentFactory:
    """決済ファクトリ"""

    def create(self, booking_id: BookingId, payment_details: PaymentDetails) -> Payment:
        """新規決済エンティティを生成する

        取引IDは毎回新しく採番する。同一予約への二重請求の防止は呼び出し側の責務。
        """
        return Payment(
            id=PaymentId.generate(),
            booking_id=booking_id,
            amount=payment_details["amount"],
            method=payment_details["method"],
            transaction_id=TransactionId.generate(),
            status=PaymentStatus.PENDING,
        )
