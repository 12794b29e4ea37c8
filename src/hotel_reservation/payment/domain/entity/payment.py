from datetime import datetime

from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId, TransactionId
from hotel_reservation.shared.domain import AggregateRoot, BookingId, Money
from hotel_reservation.shared.domain.exception import BusinessRuleViolationException


class Payment(AggregateRoot[PaymentId]):
    """決済エンティティ"""

    def __init__(
        self,
        id: PaymentId,
        booking_id: BookingId,
        amount: Money,
        method: PaymentMethod,
        transaction_id: TransactionId,
        status: PaymentStatus = PaymentStatus.PENDING,
        processed_at: datetime | None = None,
    ) -> None:
        super().__init__(id)
        self._booking_id = booking_id
        self._amount = amount
        self._method = method
        self._transaction_id = transaction_id
        self._status = status
        self._processed_at = processed_at

    @property
    def booking_id(self) -> BookingId:
        return self._booking_id

    @property
    def amount(self) -> Money:
        return self._amount

    @property
    def method(self) -> PaymentMethod:
        return self._method

    @property
    def transaction_id(self) -> TransactionId:
        return self._transaction_id

    @property
    def status(self) -> PaymentStatus:
        return self._status

    @property
    def processed_at(self) -> datetime | None:
        return self._processed_at

    def is_settled(self) -> bool:
        """一度でも決済が成立したか（返金済みを含む）"""
        return self._status in (PaymentStatus.COMPLETED, PaymentStatus.REFUNDED)

    def complete(self, processed_at: datetime) -> None:
        """決済を完了する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot complete payment in {self._status} status"
            )
        self._status = PaymentStatus.COMPLETED
        self._processed_at = processed_at

    def fail(self, processed_at: datetime) -> None:
        """決済を失敗として確定する"""
        if self._status != PaymentStatus.PENDING:
            raise BusinessRuleViolationException(
                f"Cannot fail payment in {self._status} status"
            )
        self._status = PaymentStatus.FAILED
        self._processed_at = processed_at

    def ensure_refundable(self, amount: Money) -> None:
        """払い戻し可能か検証する"""
        if self._status != PaymentStatus.COMPLETED:
            raise BusinessRuleViolationException(
                "Cannot refund a payment that is not completed"
            )
        if amount.exceeds(self._amount):
            raise BusinessRuleViolationException(
                "Refund amount cannot exceed original payment amount"
            )

    def refund(self, processed_at: datetime) -> None:
        """払い戻しを行う（補償トランザクション用）"""
        if self._status == PaymentStatus.REFUNDED:
            return
        if self._status != PaymentStatus.COMPLETED:
            raise BusinessRuleViolationException("Can only refund completed payments")
        self._status = PaymentStatus.REFUNDED
        self._processed_at = processed_at
