import random
import time
from datetime import datetime, timezone
from typing import Callable

from hotel_reservation.payment.applications.payment_result import PaymentResult
from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.factory import PaymentDetails, PaymentFactory
from hotel_reservation.payment.domain.repository import PaymentRepository
from hotel_reservation.payment.domain.value_object import PaymentId
from hotel_reservation.shared.config import PaymentSettings
from hotel_reservation.shared.domain import BookingId, Money
from hotel_reservation.shared.domain.exception import (
    BusinessRuleViolationException,
    OptimisticLockException,
)
from hotel_reservation.shared.utils import get_logger

logger = get_logger("payment-service")

CHARGE_DECLINED_MESSAGE = (
    "Payment processing failed - insufficient funds or card declined"
)
REFUND_DECLINED_MESSAGE = "Refund processing failed - please try again later"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SimulatedPaymentGateway:
    """模擬決済ゲートウェイ

    実ゲートウェイの非同期（Webhook）応答を、遅延付きの同期呼び出しに畳み込む。
    成否は設定された確率で決まる。同一予約への重複請求は検知しない。
    """

    def __init__(
        self,
        repository: PaymentRepository,
        factory: PaymentFactory,
        settings: PaymentSettings,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._settings = settings
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._clock = clock

    def charge(
        self, booking_id: BookingId, amount: Money, method: PaymentMethod
    ) -> PaymentResult:
        """予約に対して請求する"""
        logger.info(
            "Processing payment",
            extra={"booking_id": str(booking_id), "amount": str(amount)},
        )
        payment_details: PaymentDetails = {"amount": amount, "method": method}
        payment = self._factory.create(booking_id, payment_details)

        self._sleep(self._settings.charge_delay_seconds)
        succeeded = self._rng.random() < self._settings.charge_success_rate

        if succeeded:
            payment.complete(self._clock())
        else:
            payment.fail(self._clock())
        self._repository.save(payment)

        logger.info(
            "Payment processed",
            extra={
                "transaction_id": str(payment.transaction_id),
                "status": payment.status.value,
            },
        )
        return self._to_result(
            payment,
            amount=payment.amount,
            error_message=None if succeeded else CHARGE_DECLINED_MESSAGE,
        )

    def refund(self, payment_id: PaymentId, amount: Money) -> PaymentResult:
        """完了済みの決済を払い戻す"""
        logger.info(
            "Processing refund",
            extra={"payment_id": str(payment_id), "amount": str(amount)},
        )
        payment = self._repository.find_by_id(payment_id)
        if payment is None:
            return self._failed(payment_id, amount, "Payment not found")

        try:
            payment.ensure_refundable(amount)
        except BusinessRuleViolationException as e:
            return self._failed(payment_id, amount, str(e), payment)

        self._sleep(self._settings.refund_delay_seconds)
        if self._rng.random() >= self._settings.refund_success_rate:
            logger.warning("Refund declined", extra={"payment_id": str(payment_id)})
            return self._failed(payment_id, amount, REFUND_DECLINED_MESSAGE, payment)

        payment.refund(self._clock())
        try:
            self._repository.update(payment, expected_status=PaymentStatus.COMPLETED)
        except OptimisticLockException:
            logger.warning(
                "Payment changed during refund", extra={"payment_id": str(payment_id)}
            )
            return self._failed(
                payment_id, amount, "Payment was modified concurrently", payment
            )

        logger.info("Refund processed", extra={"payment_id": str(payment_id)})
        return self._to_result(payment, amount=amount)

    def payments_for(self, booking_id: BookingId) -> list[Payment]:
        """予約に紐づく決済を返す"""
        return self._repository.find_by_booking_id(booking_id)

    def _to_result(
        self, payment: Payment, amount: Money, error_message: str | None = None
    ) -> PaymentResult:
        return PaymentResult(
            payment_id=payment.id,
            status=payment.status,
            amount=amount,
            processed_at=payment.processed_at or self._clock(),
            transaction_id=payment.transaction_id,
            error_message=error_message,
        )

    def _failed(
        self,
        payment_id: PaymentId,
        amount: Money,
        message: str,
        payment: Payment | None = None,
    ) -> PaymentResult:
        return PaymentResult(
            payment_id=payment_id,
            status=PaymentStatus.FAILED,
            amount=amount,
            processed_at=self._clock(),
            transaction_id=payment.transaction_id if payment else None,
            error_message=message,
        )
