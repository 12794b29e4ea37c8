import os
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.inventory.domain.repository import HotelRepository
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import Currency, Money
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    ResourceNotFoundException,
)


class DynamoDBHotelRepository(HotelRepository):
    """DynamoDBを使用したHotelRepository の具象実装"""

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, hotel: Hotel) -> None:
        """ホテルをDBに登録する"""
        item = {
            "PK": f"HOTEL#{hotel.id}",
            "SK": "METADATA",
            "entity_type": "HOTEL",
            "hotel_id": str(hotel.id),
            "name": hotel.name,
            "nightly_rate": str(hotel.nightly_rate.amount),
            "currency": str(hotel.nightly_rate.currency),
            "available_rooms": hotel.available_rooms,
        }
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(f"Hotel already exists: {hotel.id}")
            raise

    def find_by_id(self, hotel_id: HotelId) -> Hotel | None:
        """ホテルIDで検索"""
        response = self.table.get_item(
            Key={"PK": f"HOTEL#{hotel_id}", "SK": "METADATA"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def decrement_available_rooms(self, hotel_id: HotelId) -> bool:
        """空室数 > 0 を条件に 1 減らす（単一アイテムの原子的更新）"""
        try:
            self.table.update_item(
                Key={"PK": f"HOTEL#{hotel_id}", "SK": "METADATA"},
                UpdateExpression="SET available_rooms = available_rooms - :one",
                ConditionExpression=Attr("PK").exists()
                & Attr("available_rooms").gt(0),
                ExpressionAttributeValues={":one": 1},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                return False
            raise
        return True

    def increment_available_rooms(self, hotel_id: HotelId) -> None:
        """空室数を 1 増やす"""
        try:
            self.table.update_item(
                Key={"PK": f"HOTEL#{hotel_id}", "SK": "METADATA"},
                UpdateExpression="SET available_rooms = available_rooms + :one",
                ConditionExpression=Attr("PK").exists(),
                ExpressionAttributeValues={":one": 1},
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise ResourceNotFoundException(f"Hotel not found: {hotel_id}")
            raise

    def _to_entity(self, item: dict) -> Hotel:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        return Hotel(
            id=HotelId(value=item["hotel_id"]),
            name=item["name"],
            nightly_rate=Money(
                amount=Decimal(item["nightly_rate"]),
                currency=Currency(item["currency"]),
            ),
            available_rooms=int(item["available_rooms"]),
        )
