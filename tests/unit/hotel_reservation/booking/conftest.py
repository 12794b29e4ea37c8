from dataclasses import dataclass
from datetime import date

import pytest

from hotel_reservation.booking.applications import (
    BookingValidator,
    CancelBookingService,
    CreateBookingService,
    GetBookingService,
    SettlePaymentService,
)
from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.factory import BookingFactory
from hotel_reservation.inventory.applications import InventoryLedger
from hotel_reservation.loyalty.applications import LoyaltyLedger
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.payment.applications import SimulatedPaymentGateway
from hotel_reservation.payment.domain.factory import PaymentFactory
from hotel_reservation.shared.config import (
    BookingSettings,
    LoyaltySettings,
    PaymentSettings,
)
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)

TODAY = date(2025, 6, 1)


def _copy(booking: Booking) -> Booking:
    return Booking(
        id=booking.id,
        hotel_id=booking.hotel_id,
        user_id=booking.user_id,
        stay_period=booking.stay_period,
        guest=booking.guest,
        total_amount=booking.total_amount,
        created_at=booking.created_at,
        status=booking.status,
        redemption=booking.redemption,
    )


class InMemoryBookingRepository:
    """BookingRepository のインメモリ実装（保存時にコピーを保持する）"""

    def __init__(self) -> None:
        self.bookings: dict = {}

    def save(self, booking):
        if booking.id in self.bookings:
            raise DuplicateResourceException("Booking already exists")
        self.bookings[booking.id] = _copy(booking)

    def find_by_id(self, booking_id):
        booking = self.bookings.get(booking_id)
        return _copy(booking) if booking else None

    def find_by_user_and_hotel(self, user_id, hotel_id):
        return [
            _copy(b)
            for b in self.bookings.values()
            if b.user_id == user_id and b.hotel_id == hotel_id
        ]

    def update(self, booking, expected_status=None):
        stored = self.bookings.get(booking.id)
        if stored is None or (
            expected_status is not None and stored.status != expected_status
        ):
            raise OptimisticLockException("Booking was modified concurrently")
        self.bookings[booking.id] = _copy(booking)


class InMemoryPaymentRepository:
    """PaymentRepository のインメモリ実装"""

    def __init__(self) -> None:
        self.payments: dict = {}

    def save(self, payment):
        if payment.id in self.payments:
            raise DuplicateResourceException("Payment already exists")
        self.payments[payment.id] = payment

    def find_by_id(self, payment_id):
        return self.payments.get(payment_id)

    def find_by_booking_id(self, booking_id):
        return [p for p in self.payments.values() if p.booking_id == booking_id]

    def update(self, payment, expected_status=None):
        self.payments[payment.id] = payment


class ScriptedRandom:
    """決済の成否を決める乱数を順に返す（尽きたら常に成功する 0.0）"""

    def __init__(self) -> None:
        self.values: list[float] = []

    def random(self) -> float:
        return self.values.pop(0) if self.values else 0.0


@dataclass
class BookingSystem:
    """実際のサービス群をインメモリのリポジトリで組み立てたもの"""

    create: CreateBookingService
    settle: SettlePaymentService
    cancel: CancelBookingService
    get: GetBookingService
    hotels: object
    bookings: InMemoryBookingRepository
    payments: InMemoryPaymentRepository
    loyalty: LoyaltyLedger
    rng: ScriptedRandom


@pytest.fixture
def booking_details():
    """予約入力を生成する Factory fixture（既定は 2 泊）"""

    def _factory(**overrides) -> dict:
        details = {
            "hotel_id": "hotel-1",
            "check_in_date": "2025-07-01",
            "check_out_date": "2025-07-03",
            "guest_count": 2,
            "guest_name": "Taro Yamada",
            "guest_email": "taro@example.com",
        }
        details.update(overrides)
        return details

    return _factory


@pytest.fixture
def create_system(hotel_repository_factory, loyalty_repository, create_hotel, clock):
    """BookingSystem を生成する Factory fixture"""

    def _factory(*hotels, payment_settings: PaymentSettings | None = None):
        hotels = hotels or (create_hotel(),)
        hotel_repository = hotel_repository_factory(*hotels)
        booking_repository = InMemoryBookingRepository()
        payment_repository = InMemoryPaymentRepository()
        payment_settings = payment_settings or PaymentSettings()
        rng = ScriptedRandom()

        inventory = InventoryLedger(hotel_repository)
        loyalty = LoyaltyLedger(
            repository=loyalty_repository,
            factory=PointsTransactionFactory(),
            policy=PointsPolicy(LoyaltySettings()),
            clock=clock,
        )
        gateway = SimulatedPaymentGateway(
            repository=payment_repository,
            factory=PaymentFactory(),
            settings=payment_settings,
            rng=rng,
            sleep=lambda _: None,
            clock=clock,
        )
        validator = BookingValidator(
            BookingSettings(), booking_repository, today=lambda: TODAY
        )
        return BookingSystem(
            create=CreateBookingService(
                repository=booking_repository,
                factory=BookingFactory(),
                validator=validator,
                inventory=inventory,
                loyalty=loyalty,
                clock=clock,
            ),
            settle=SettlePaymentService(
                repository=booking_repository,
                payments=gateway,
                inventory=inventory,
                loyalty=loyalty,
                settings=payment_settings,
            ),
            cancel=CancelBookingService(
                repository=booking_repository,
                payments=gateway,
                inventory=inventory,
                loyalty=loyalty,
            ),
            get=GetBookingService(
                repository=booking_repository, payments=gateway, loyalty=loyalty
            ),
            hotels=hotel_repository,
            bookings=booking_repository,
            payments=payment_repository,
            loyalty=loyalty,
            rng=rng,
        )

    return _factory
