import pytest

from hotel_reservation.loyalty.domain.entity import LoyaltyAccount, PointsTransaction
from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import Money, UserId
from hotel_reservation.shared.domain.exception import InsufficientPointsException


class TestLoyaltyAccount:
    def test_earn_increases_balance_and_total(self, user_id, booking_id, clock):
        account = LoyaltyAccount(id=user_id)

        account.apply(PointsTransactionFactory().earn(user_id, booking_id, 15, clock()))

        assert account.points_balance == 15
        assert account.total_points_earned == 15
        assert account.last_updated == clock()

    def test_redeem_more_than_balance_is_rejected(self, user_id, clock):
        account = LoyaltyAccount(id=user_id, points_balance=10)
        redeem = PointsTransactionFactory().redeem(
            user_id, 11, Money.usd(11), clock()
        )

        with pytest.raises(InsufficientPointsException):
            account.apply(redeem)

        assert account.points_balance == 10

    def test_revocation_may_make_balance_negative(self, user_id, booking_id, clock):
        factory = PointsTransactionFactory()
        earned = factory.earn(user_id, booking_id, 15, clock())
        account = LoyaltyAccount(id=user_id, points_balance=5, total_points_earned=15)

        account.apply(factory.revocation(earned, clock()))

        assert account.points_balance == -10
        assert account.total_points_earned == 15

    def test_transaction_of_other_user_is_rejected(self, user_id, booking_id, clock):
        account = LoyaltyAccount(id=user_id)
        other = PointsTransactionFactory().earn(
            UserId(value="someone-else"), booking_id, 5, clock()
        )

        with pytest.raises(ValueError):
            account.apply(other)


class TestPointsTransaction:
    @pytest.mark.parametrize(
        "kind, points",
        [
            (TransactionKind.EARN, -5),
            (TransactionKind.REDEEM, 5),
            (TransactionKind.REVOCATION, 5),
            (TransactionKind.REDEMPTION_REVERSAL, 0),
        ],
    )
    def test_delta_sign_must_match_kind(self, user_id, clock, kind, points):
        with pytest.raises(ValueError):
            PointsTransaction(
                id=PointsTransactionId(value="txn-1"),
                user_id=user_id,
                kind=kind,
                points=points,
                description="invalid",
                created_at=clock(),
            )

    def test_booking_linked_ids_are_deterministic(self, booking_id):
        first = PointsTransactionId.for_booking(TransactionKind.EARN, booking_id)
        second = PointsTransactionId.for_booking(TransactionKind.EARN, booking_id)

        assert first == second
        assert str(first) == "earn_for_bk-123"
        assert first != PointsTransactionId.for_booking(
            TransactionKind.REVOCATION, booking_id
        )

    def test_link_to_booking_once(self, user_id, booking_id, clock):
        redeem = PointsTransactionFactory().redeem(user_id, 5, Money.usd(5), clock())

        redeem.link_to(booking_id)
        redeem.link_to(booking_id)

        assert redeem.booking_id == booking_id
