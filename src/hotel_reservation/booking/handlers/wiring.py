"""Lambda ハンドラ共通の依存関係の組み立て

コールドスタート時に 1 度だけ生成し、ウォームスタートでは再利用する。
"""

from hotel_reservation.booking.infrastructure import DynamoDBBookingRepository
from hotel_reservation.inventory.applications import InventoryLedger
from hotel_reservation.inventory.infrastructure import DynamoDBHotelRepository
from hotel_reservation.loyalty.applications import LoyaltyLedger
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.loyalty.infrastructure import DynamoDBLoyaltyRepository
from hotel_reservation.payment.applications import SimulatedPaymentGateway
from hotel_reservation.payment.domain.factory import PaymentFactory
from hotel_reservation.payment.infrastructure import DynamoDBPaymentRepository
from hotel_reservation.shared.config import LoyaltySettings, PaymentSettings


def build_booking_repository() -> DynamoDBBookingRepository:
    return DynamoDBBookingRepository()


def build_inventory() -> InventoryLedger:
    return InventoryLedger(repository=DynamoDBHotelRepository())


def build_loyalty() -> LoyaltyLedger:
    return LoyaltyLedger(
        repository=DynamoDBLoyaltyRepository(),
        factory=PointsTransactionFactory(),
        policy=PointsPolicy(LoyaltySettings.from_env()),
    )


def build_payments(settings: PaymentSettings) -> SimulatedPaymentGateway:
    return SimulatedPaymentGateway(
        repository=DynamoDBPaymentRepository(),
        factory=PaymentFactory(),
        settings=settings,
    )
