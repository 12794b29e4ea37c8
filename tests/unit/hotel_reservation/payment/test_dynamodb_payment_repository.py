from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.value_object import PaymentId
from hotel_reservation.payment.infrastructure import DynamoDBPaymentRepository
from hotel_reservation.shared.domain.exception import OptimisticLockException


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def repository(table):
    with patch(
        "hotel_reservation.payment.infrastructure.dynamodb_payment_repository.boto3"
    ) as mock_boto3:
        mock_boto3.resource.return_value.Table.return_value = table
        yield DynamoDBPaymentRepository(table_name="test-table")


class TestDynamoDBPaymentRepository:
    def test_save_stores_payment_under_booking(self, repository, table, create_payment):
        repository.save(create_payment(status=PaymentStatus.COMPLETED))

        item = table.put_item.call_args.kwargs["Item"]
        assert item["PK"] == "BOOKING#bk-123"
        assert item["SK"] == "PAYMENT#pay-1"
        assert item["GSI1PK"] == "PAYMENT#pay-1"
        assert item["status"] == "COMPLETED"
        assert item["method"] == "CreditCard"

    def test_update_with_expected_status_conflict(
        self, repository, table, create_payment
    ):
        table.update_item.side_effect = ClientError(
            {"Error": {"Code": "ConditionalCheckFailedException"}}, "UpdateItem"
        )

        with pytest.raises(OptimisticLockException):
            repository.update(
                create_payment(status=PaymentStatus.REFUNDED),
                expected_status=PaymentStatus.COMPLETED,
            )

    def test_find_by_id_queries_gsi(self, repository, table):
        table.query.return_value = {
            "Items": [
                {
                    "payment_id": "pay-1",
                    "booking_id": "bk-123",
                    "amount": "150",
                    "currency": "USD",
                    "method": "PayPal",
                    "transaction_id": "ABCDEF123456",
                    "status": "COMPLETED",
                    "processed_at": "2025-06-01T09:00:00+00:00",
                }
            ]
        }

        payment = repository.find_by_id(PaymentId(value="pay-1"))

        assert table.query.call_args.kwargs["IndexName"] == "GSI1"
        assert payment.method == PaymentMethod.PAYPAL
        assert payment.status == PaymentStatus.COMPLETED
        assert payment.processed_at.year == 2025

    def test_find_by_booking_id_returns_empty_list(self, repository, table, booking_id):
        table.query.return_value = {"Items": []}

        assert repository.find_by_booking_id(booking_id) == []
