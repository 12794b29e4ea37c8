import pytest

from hotel_reservation.loyalty.applications import LoyaltyLedger
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.shared.config import LoyaltySettings


@pytest.fixture
def create_ledger(loyalty_repository, clock):
    """LoyaltyLedger を生成する Factory fixture"""

    def _factory(settings: LoyaltySettings | None = None) -> LoyaltyLedger:
        return LoyaltyLedger(
            repository=loyalty_repository,
            factory=PointsTransactionFactory(),
            policy=PointsPolicy(settings or LoyaltySettings()),
            clock=clock,
        )

    return _factory
