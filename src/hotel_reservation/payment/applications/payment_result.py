from dataclasses import dataclass
from datetime import datetime

from hotel_reservation.payment.domain.enum import PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId, TransactionId
from hotel_reservation.shared.domain import Money


@dataclass(frozen=True)
class PaymentResult:
    """決済・払い戻しの結果

    ゲートウェイの拒否は例外ではなく status=FAILED の結果として返す。
    """

    payment_id: PaymentId
    status: PaymentStatus
    amount: Money
    processed_at: datetime
    transaction_id: TransactionId | None = None
    error_message: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    @property
    def is_refunded(self) -> bool:
        return self.status == PaymentStatus.REFUNDED
