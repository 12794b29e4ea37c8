from decimal import Decimal

import pytest

from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.value_object import TransactionId
from hotel_reservation.shared.domain import Money
from hotel_reservation.shared.domain.exception import BusinessRuleViolationException


class TestPayment:
    def test_complete_pending_payment(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.PENDING)

        payment.complete(clock())

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.processed_at == clock()
        assert payment.is_settled()

    def test_cannot_complete_failed_payment(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.FAILED)
        with pytest.raises(BusinessRuleViolationException):
            payment.complete(clock())

    def test_fail_pending_payment(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.PENDING)

        payment.fail(clock())

        assert payment.status == PaymentStatus.FAILED
        assert not payment.is_settled()

    def test_refund_completed_payment(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.COMPLETED)
        payment.refund(clock())
        assert payment.status == PaymentStatus.REFUNDED

    def test_refund_is_idempotent(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.REFUNDED)
        payment.refund(clock())
        assert payment.status == PaymentStatus.REFUNDED

    def test_cannot_refund_pending_payment(self, create_payment, clock):
        payment = create_payment(status=PaymentStatus.PENDING)
        with pytest.raises(BusinessRuleViolationException):
            payment.refund(clock())

    def test_refund_amount_cannot_exceed_original(self, create_payment):
        payment = create_payment(status=PaymentStatus.COMPLETED, amount=Decimal("150"))

        with pytest.raises(BusinessRuleViolationException) as exc_info:
            payment.ensure_refundable(Money.usd(Decimal("151")))

        assert "cannot exceed" in str(exc_info.value)

    def test_only_completed_payment_is_refundable(self, create_payment):
        payment = create_payment(status=PaymentStatus.FAILED)
        with pytest.raises(BusinessRuleViolationException):
            payment.ensure_refundable(Money.usd(Decimal("150")))


class TestPaymentMethod:
    def test_card_methods_require_card(self):
        assert PaymentMethod.CREDIT_CARD.requires_card
        assert PaymentMethod.DEBIT_CARD.requires_card
        assert not PaymentMethod.PAYPAL.requires_card
        assert not PaymentMethod.BANK_TRANSFER.requires_card


class TestTransactionId:
    def test_generated_id_is_twelve_alphanumeric_characters(self):
        transaction_id = TransactionId.generate()

        assert len(str(transaction_id)) == 12
        assert str(transaction_id).isalnum()
        assert str(transaction_id).upper() == str(transaction_id)

    def test_generated_ids_are_unique(self):
        assert len({TransactionId.generate() for _ in range(50)}) == 50

    @pytest.mark.parametrize("value", ["", "short", "abcdef123456", "ABCDEF12345!"])
    def test_invalid_values_are_rejected(self, value):
        with pytest.raises(ValueError):
            TransactionId(value=value)
