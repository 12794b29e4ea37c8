from decimal import Decimal

import pytest

from hotel_reservation.payment.applications import SimulatedPaymentGateway
from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.factory import PaymentFactory
from hotel_reservation.payment.domain.value_object import PaymentId
from hotel_reservation.shared.config import PaymentSettings
from hotel_reservation.shared.domain import Money
from hotel_reservation.shared.domain.exception import OptimisticLockException


@pytest.fixture
def create_gateway(mock_repository, clock):
    def _factory(*random_values: float, settings: PaymentSettings | None = None):
        sleeps: list[float] = []

        class _Rng:
            def __init__(self) -> None:
                self._values = list(random_values)

            def random(self) -> float:
                return self._values.pop(0)

        gateway = SimulatedPaymentGateway(
            repository=mock_repository,
            factory=PaymentFactory(),
            settings=settings or PaymentSettings(),
            rng=_Rng(),
            sleep=sleeps.append,
            clock=clock,
        )
        return gateway, sleeps

    return _factory


class TestCharge:
    def test_successful_charge_is_persisted_as_completed(
        self, create_gateway, mock_repository, booking_id
    ):
        gateway, sleeps = create_gateway(0.5)

        result = gateway.charge(
            booking_id, Money.usd(Decimal("150")), PaymentMethod.CREDIT_CARD
        )

        assert result.is_completed
        assert result.error_message is None
        assert result.transaction_id is not None
        assert sleeps == [1.0]
        saved = mock_repository.save.call_args[0][0]
        assert saved.status == PaymentStatus.COMPLETED
        assert saved.id == result.payment_id

    def test_declined_charge_is_persisted_as_failed(
        self, create_gateway, mock_repository, booking_id
    ):
        gateway, _ = create_gateway(0.95)

        result = gateway.charge(
            booking_id, Money.usd(Decimal("150")), PaymentMethod.CREDIT_CARD
        )

        assert result.status == PaymentStatus.FAILED
        assert "declined" in result.error_message
        assert mock_repository.save.call_args[0][0].status == PaymentStatus.FAILED

    def test_success_rate_is_configurable(self, create_gateway, booking_id):
        gateway, _ = create_gateway(
            0.5, settings=PaymentSettings(charge_success_rate=0.4)
        )

        result = gateway.charge(
            booking_id, Money.usd(Decimal("150")), PaymentMethod.PAYPAL
        )

        assert result.status == PaymentStatus.FAILED


class TestRefund:
    def test_refund_completed_payment(
        self, create_gateway, mock_repository, create_payment
    ):
        payment = create_payment(status=PaymentStatus.COMPLETED)
        mock_repository.find_by_id.return_value = payment
        gateway, sleeps = create_gateway(0.1)

        result = gateway.refund(payment.id, payment.amount)

        assert result.is_refunded
        assert sleeps == [0.5]
        mock_repository.update.assert_called_once_with(
            payment, expected_status=PaymentStatus.COMPLETED
        )

    def test_missing_payment_is_a_failed_result(self, create_gateway, mock_repository):
        mock_repository.find_by_id.return_value = None
        gateway, _ = create_gateway()

        result = gateway.refund(PaymentId(value="pay-x"), Money.usd(Decimal("10")))

        assert result.status == PaymentStatus.FAILED
        assert result.error_message == "Payment not found"

    def test_refund_of_pending_payment_fails(
        self, create_gateway, mock_repository, create_payment
    ):
        payment = create_payment(status=PaymentStatus.PENDING)
        mock_repository.find_by_id.return_value = payment
        gateway, sleeps = create_gateway()

        result = gateway.refund(payment.id, payment.amount)

        assert result.status == PaymentStatus.FAILED
        assert sleeps == []
        mock_repository.update.assert_not_called()

    def test_refund_exceeding_amount_fails(
        self, create_gateway, mock_repository, create_payment
    ):
        payment = create_payment(status=PaymentStatus.COMPLETED, amount=Decimal("150"))
        mock_repository.find_by_id.return_value = payment
        gateway, _ = create_gateway()

        result = gateway.refund(payment.id, Money.usd(Decimal("200")))

        assert result.status == PaymentStatus.FAILED
        assert payment.status == PaymentStatus.COMPLETED

    def test_declined_refund_leaves_payment_completed(
        self, create_gateway, mock_repository, create_payment
    ):
        payment = create_payment(status=PaymentStatus.COMPLETED)
        mock_repository.find_by_id.return_value = payment
        gateway, _ = create_gateway(0.99)

        result = gateway.refund(payment.id, payment.amount)

        assert result.status == PaymentStatus.FAILED
        assert payment.status == PaymentStatus.COMPLETED
        mock_repository.update.assert_not_called()

    def test_concurrent_modification_is_a_failed_result(
        self, create_gateway, mock_repository, create_payment
    ):
        payment = create_payment(status=PaymentStatus.COMPLETED)
        mock_repository.find_by_id.return_value = payment
        mock_repository.update.side_effect = OptimisticLockException("conflict")
        gateway, _ = create_gateway(0.1)

        result = gateway.refund(payment.id, payment.amount)

        assert result.status == PaymentStatus.FAILED
