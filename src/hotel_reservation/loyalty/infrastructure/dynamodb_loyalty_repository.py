import os
from datetime import datetime

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from hotel_reservation.loyalty.domain.entity import LoyaltyAccount, PointsTransaction
from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.loyalty.domain.repository import LoyaltyRepository
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, UserId
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    InsufficientPointsException,
    ResourceNotFoundException,
)

# TransactWriteItems 内の位置（CancellationReasons の添字と対応）
_PUT_TRANSACTION = 0
_UPDATE_ACCOUNT = 1


class DynamoDBLoyaltyRepository(LoyaltyRepository):
    """DynamoDBを使用したLoyaltyRepository の具象実装

    口座と取引は同じパーティション（LOYALTY#<user_id>）に置き、
    取引の追記と残高の更新を TransactWriteItems でまとめて書き込む。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)
        # リソース経由のクライアントは Python の型をそのまま直列化する
        self.client = self.table.meta.client

    def save(self, account: LoyaltyAccount) -> None:
        """口座を新規作成する"""
        item = {
            "PK": f"LOYALTY#{account.user_id}",
            "SK": "ACCOUNT",
            "entity_type": "LOYALTY_ACCOUNT",
            "user_id": str(account.user_id),
            "points_balance": account.points_balance,
            "total_points_earned": account.total_points_earned,
            "last_updated": _isoformat(account.last_updated),
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    "Loyalty account already exists for this user"
                )
            raise

    def find_by_id(self, user_id: UserId) -> LoyaltyAccount | None:
        """ユーザーIDで口座を検索"""
        response = self.table.get_item(
            Key={"PK": f"LOYALTY#{user_id}", "SK": "ACCOUNT"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_account(item)

    def append_transaction(self, transaction: PointsTransaction) -> bool:
        """取引の追記と残高の更新を 1 トランザクションで書き込む"""
        earned = transaction.points if transaction.kind == TransactionKind.EARN else 0
        update: dict = {
            "TableName": self.table_name,
            "Key": {"PK": f"LOYALTY#{transaction.user_id}", "SK": "ACCOUNT"},
            "UpdateExpression": (
                "SET entity_type = :entity_type, "
                "user_id = if_not_exists(user_id, :user_id), "
                "last_updated = :now "
                "ADD points_balance :delta, total_points_earned :earned"
            ),
            "ExpressionAttributeValues": {
                ":entity_type": "LOYALTY_ACCOUNT",
                ":user_id": str(transaction.user_id),
                ":now": _isoformat(transaction.created_at),
                ":delta": transaction.points,
                ":earned": earned,
            },
        }
        if transaction.kind == TransactionKind.REDEEM:
            update["ConditionExpression"] = "points_balance >= :required"
            update["ExpressionAttributeValues"][":required"] = -transaction.points

        try:
            self.client.transact_write_items(
                TransactItems=[
                    {
                        "Put": {
                            "TableName": self.table_name,
                            "Item": self._to_transaction_item(transaction),
                            "ConditionExpression": "attribute_not_exists(PK)",
                        }
                    },
                    {"Update": update},
                ]
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "TransactionCanceledException":
                raise
            reasons = e.response.get("CancellationReasons", [])
            if _failed_condition(reasons, _PUT_TRANSACTION):
                return False
            if _failed_condition(reasons, _UPDATE_ACCOUNT):
                raise InsufficientPointsException(
                    f"Insufficient points. Requested: {-transaction.points}"
                )
            raise
        return True

    def find_transaction(
        self, user_id: UserId, transaction_id: PointsTransactionId
    ) -> PointsTransaction | None:
        response = self.table.get_item(
            Key={"PK": f"LOYALTY#{user_id}", "SK": f"TXN#{transaction_id}"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_transaction(item)

    def find_transactions(self, user_id: UserId) -> list[PointsTransaction]:
        kwargs: dict = {
            "KeyConditionExpression": Key("PK").eq(f"LOYALTY#{user_id}")
            & Key("SK").begins_with("TXN#"),
            "ConsistentRead": True,
        }
        items: list[dict] = []
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            kwargs["ExclusiveStartKey"] = last_key
        return [self._to_transaction(item) for item in items]

    def link_booking(
        self,
        user_id: UserId,
        transaction_id: PointsTransactionId,
        booking_id: BookingId,
    ) -> None:
        """引き換え取引に予約IDを紐づける"""
        try:
            self.table.update_item(
                Key={"PK": f"LOYALTY#{user_id}", "SK": f"TXN#{transaction_id}"},
                UpdateExpression="SET booking_id = :booking_id",
                ConditionExpression=Attr("PK").exists()
                & (
                    Attr("booking_id").not_exists()
                    | Attr("booking_id").eq(str(booking_id))
                ),
                ExpressionAttributeValues={":booking_id": str(booking_id)},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(
                    f"Unlinked points transaction not found: {transaction_id}"
                )
            raise

    def _to_transaction_item(self, transaction: PointsTransaction) -> dict:
        item = {
            "PK": f"LOYALTY#{transaction.user_id}",
            "SK": f"TXN#{transaction.id}",
            "entity_type": "POINTS_TRANSACTION",
            "transaction_id": str(transaction.id),
            "user_id": str(transaction.user_id),
            "kind": transaction.kind.value,
            "points": transaction.points,
            "description": transaction.description,
            "created_at": _isoformat(transaction.created_at),
        }
        if transaction.booking_id is not None:
            item["booking_id"] = str(transaction.booking_id)
        return item

    def _to_account(self, item: dict) -> LoyaltyAccount:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        last_updated = item.get("last_updated")
        return LoyaltyAccount(
            id=UserId(value=item["user_id"]),
            points_balance=int(item.get("points_balance", 0)),
            total_points_earned=int(item.get("total_points_earned", 0)),
            last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
        )

    def _to_transaction(self, item: dict) -> PointsTransaction:
        booking_id = item.get("booking_id")
        return PointsTransaction(
            id=PointsTransactionId(value=item["transaction_id"]),
            user_id=UserId(value=item["user_id"]),
            kind=TransactionKind(item["kind"]),
            points=int(item["points"]),
            description=item["description"],
            created_at=datetime.fromisoformat(item["created_at"]),
            booking_id=BookingId(value=booking_id) if booking_id else None,
        )


def _failed_condition(reasons: list[dict], index: int) -> bool:
    return (
        len(reasons) > index
        and reasons[index].get("Code") == "ConditionalCheckFailed"
    )


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
