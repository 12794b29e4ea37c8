import os
from datetime import datetime
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from hotel_reservation.payment.domain.entity import Payment
from hotel_reservation.payment.domain.enum import PaymentMethod, PaymentStatus
from hotel_reservation.payment.domain.repository import PaymentRepository
from hotel_reservation.payment.domain.value_object import PaymentId, TransactionId
from hotel_reservation.shared.domain import BookingId, Currency, Money
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


class DynamoDBPaymentRepository(PaymentRepository):
    """DynamoDBを使用したPaymentRepository の具象実装

    決済アイテムは予約のパーティション（BOOKING#）配下に置き、
    決済IDでの逆引きは GSI1 を使う。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, payment: Payment) -> None:
        """決済をDBに保存する"""
        item = {
            "PK": f"BOOKING#{payment.booking_id}",
            "SK": f"PAYMENT#{payment.id}",
            "entity_type": "PAYMENT",
            "payment_id": str(payment.id),
            "booking_id": str(payment.booking_id),
            "amount": str(payment.amount.amount),
            "currency": str(payment.amount.currency),
            "method": payment.method.value,
            "transaction_id": str(payment.transaction_id),
            "status": payment.status.value,
            "processed_at": _isoformat(payment.processed_at),
            "GSI1PK": f"PAYMENT#{payment.id}",
            "GSI1SK": f"PAYMENT#{payment.id}",
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Payment already exists: {payment.id}"
                )
            raise

    def find_by_id(self, payment_id: PaymentId) -> Payment | None:
        """決済IDで検索"""
        response = self.table.query(
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"PAYMENT#{payment_id}"),
        )
        items = response.get("Items", [])
        if not items:
            return None
        return self._to_entity(items[0])

    def find_by_booking_id(self, booking_id: BookingId) -> list[Payment]:
        """予約IDで決済を検索する"""
        response = self.table.query(
            KeyConditionExpression=Key("PK").eq(f"BOOKING#{booking_id}")
            & Key("SK").begins_with("PAYMENT#"),
            ConsistentRead=True,
        )
        return [self._to_entity(item) for item in response.get("Items", [])]

    def update(
        self, payment: Payment, expected_status: PaymentStatus | None = None
    ) -> None:
        """決済のステータスを更新する"""
        kwargs: dict = {
            "Key": {
                "PK": f"BOOKING#{payment.booking_id}",
                "SK": f"PAYMENT#{payment.id}",
            },
            "UpdateExpression": "SET #status = :status, processed_at = :processed_at",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": {
                ":status": payment.status.value,
                ":processed_at": _isoformat(payment.processed_at),
            },
        }

        if expected_status is not None:
            kwargs["ConditionExpression"] = Attr("status").eq(expected_status.value)

        try:
            self.table.update_item(**kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Payment status conflict: "
                    f"expected {expected_status}, "
                    f"payment_id={payment.id}"
                )
            raise

    def _to_entity(self, item: dict) -> Payment:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        processed_at = item.get("processed_at")
        return Payment(
            id=PaymentId(value=item["payment_id"]),
            booking_id=BookingId(value=item["booking_id"]),
            amount=Money(
                amount=Decimal(item["amount"]),
                currency=Currency(item["currency"]),
            ),
            method=PaymentMethod(item["method"]),
            transaction_id=TransactionId(value=item["transaction_id"]),
            status=PaymentStatus(item["status"]),
            processed_at=datetime.fromisoformat(processed_at) if processed_at else None,
        )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
