from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from hotel_reservation.loyalty.domain.entity import LoyaltyAccount
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.loyalty.infrastructure import DynamoDBLoyaltyRepository
from hotel_reservation.shared.domain import Money
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    InsufficientPointsException,
    ResourceNotFoundException,
)


def _transaction_canceled(*codes: str) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": "TransactionCanceledException"},
            "CancellationReasons": [{"Code": code} for code in codes],
        },
        "TransactWriteItems",
    )


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def repository(table):
    with patch(
        "hotel_reservation.loyalty.infrastructure.dynamodb_loyalty_repository.boto3"
    ) as mock_boto3:
        mock_boto3.resource.return_value.Table.return_value = table
        yield DynamoDBLoyaltyRepository(table_name="test-table")


class TestAppendTransaction:
    def test_earn_puts_transaction_and_adds_to_balance(
        self, repository, table, user_id, booking_id, clock
    ):
        earn = PointsTransactionFactory().earn(user_id, booking_id, 15, clock())

        assert repository.append_transaction(earn) is True

        items = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ]
        put, update = items[0]["Put"], items[1]["Update"]
        assert put["Item"]["PK"] == "LOYALTY#user-1"
        assert put["Item"]["SK"] == "TXN#earn_for_bk-123"
        assert put["Item"]["booking_id"] == "bk-123"
        assert put["ConditionExpression"] == "attribute_not_exists(PK)"
        assert update["Key"] == {"PK": "LOYALTY#user-1", "SK": "ACCOUNT"}
        assert update["ExpressionAttributeValues"][":delta"] == 15
        assert update["ExpressionAttributeValues"][":earned"] == 15
        assert "ConditionExpression" not in update

    def test_redeem_requires_sufficient_balance(
        self, repository, table, user_id, clock
    ):
        redeem = PointsTransactionFactory().redeem(user_id, 20, Money.usd(20), clock())

        repository.append_transaction(redeem)

        update = table.meta.client.transact_write_items.call_args.kwargs[
            "TransactItems"
        ][1]["Update"]
        assert update["ConditionExpression"] == "points_balance >= :required"
        assert update["ExpressionAttributeValues"][":required"] == 20
        assert update["ExpressionAttributeValues"][":earned"] == 0

    def test_duplicate_transaction_returns_false(
        self, repository, table, user_id, booking_id, clock
    ):
        table.meta.client.transact_write_items.side_effect = _transaction_canceled(
            "ConditionalCheckFailed", "None"
        )
        earn = PointsTransactionFactory().earn(user_id, booking_id, 15, clock())

        assert repository.append_transaction(earn) is False

    def test_balance_condition_failure_raises(self, repository, table, user_id, clock):
        table.meta.client.transact_write_items.side_effect = _transaction_canceled(
            "None", "ConditionalCheckFailed"
        )
        redeem = PointsTransactionFactory().redeem(user_id, 20, Money.usd(20), clock())

        with pytest.raises(InsufficientPointsException):
            repository.append_transaction(redeem)

    def test_other_errors_are_propagated(
        self, repository, table, user_id, booking_id, clock
    ):
        table.meta.client.transact_write_items.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException"}},
            "TransactWriteItems",
        )
        earn = PointsTransactionFactory().earn(user_id, booking_id, 15, clock())

        with pytest.raises(ClientError):
            repository.append_transaction(earn)


class TestAccount:
    def test_save_duplicate_account(self, repository, table, user_id):
        table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException"}}, "PutItem"
        )

        with pytest.raises(DuplicateResourceException):
            repository.save(LoyaltyAccount(id=user_id))

    def test_find_by_id_maps_item(self, repository, table, user_id):
        table.get_item.return_value = {
            "Item": {
                "user_id": "user-1",
                "points_balance": 42,
                "total_points_earned": 100,
                "last_updated": "2025-06-01T09:00:00+00:00",
            }
        }

        account = repository.find_by_id(user_id)

        assert account.points_balance == 42
        assert account.total_points_earned == 100
        assert account.last_updated.year == 2025

    def test_find_by_id_missing(self, repository, table, user_id):
        table.get_item.return_value = {}

        assert repository.find_by_id(user_id) is None


class TestTransactions:
    def test_find_transactions_follows_pagination(self, repository, table, user_id):
        item = {
            "transaction_id": "earn_for_bk-1",
            "user_id": "user-1",
            "kind": "EARN",
            "points": 10,
            "description": "Points earned from booking #bk-1",
            "created_at": "2025-06-01T09:00:00+00:00",
            "booking_id": "bk-1",
        }
        table.query.side_effect = [
            {"Items": [item], "LastEvaluatedKey": {"PK": "x", "SK": "y"}},
            {"Items": [{**item, "transaction_id": "earn_for_bk-2"}]},
        ]

        transactions = repository.find_transactions(user_id)

        assert [str(t.id) for t in transactions] == ["earn_for_bk-1", "earn_for_bk-2"]
        assert table.query.call_args_list[1].kwargs["ExclusiveStartKey"] == {
            "PK": "x",
            "SK": "y",
        }

    def test_link_booking_to_missing_transaction(
        self, repository, table, user_id, booking_id
    ):
        table.update_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException"}}, "UpdateItem"
        )

        with pytest.raises(ResourceNotFoundException):
            repository.link_booking(
                user_id, PointsTransactionId(value="txn-1"), booking_id
            )
