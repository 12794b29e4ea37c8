from decimal import Decimal

import pytest

from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId, TransactionId
from hotel_reservation.shared.domain import BookingId, Money


@pytest.fixture
def create_payment():
    """Payment を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        status: PaymentStatus = PaymentStatus.PENDING,
        payment_id: str = "pay-1",
        booking_id: str = "bk-123",
        amount: Decimal = Decimal("150"),
        method: PaymentMethod = PaymentMethod.CREDIT_CARD,
    ) -> Payment:
        return Payment(
            id=PaymentId(value=payment_id),
            booking_id=BookingId(value=booking_id),
            amount=Money.usd(amount),
            method=method,
            transaction_id=TransactionId(value="ABCDEF123456"),
            status=status,
        )

    return _factory
