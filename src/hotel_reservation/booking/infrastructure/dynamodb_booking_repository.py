import os
from datetime import datetime
from decimal import Decimal

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from hotel_reservation.booking.domain.entity import Booking
from hotel_reservation.booking.domain.enum import BookingStatus
from hotel_reservation.booking.domain.repository import BookingRepository
from hotel_reservation.booking.domain.value_object import (
    GuestInfo,
    LoyaltyRedemption,
    StayPeriod,
)
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import BookingId, Currency, Money, UserId
from hotel_reservation.shared.domain.exception import (
    DuplicateResourceException,
    OptimisticLockException,
)


class DynamoDBBookingRepository(BookingRepository):
    """DynamoDBを使用したBookingRepository の具象実装

    ログインユーザーの予約は GSI1（USER#<user_id> / HOTEL#<hotel_id>#BOOKING#<id>）
    にも載せ、同一ホテルでの重複予約チェックに使う。
    """

    def __init__(self, table_name: str | None = None) -> None:
        self.table_name = table_name or os.getenv("TABLE_NAME")
        self.dynamodb = boto3.resource("dynamodb")
        self.table = self.dynamodb.Table(self.table_name)

    def save(self, booking: Booking) -> None:
        """予約をDBに保存する"""
        item = {
            "PK": f"BOOKING#{booking.id}",
            "SK": "METADATA",
            "entity_type": "BOOKING",
            "booking_id": str(booking.id),
            "hotel_id": str(booking.hotel_id),
            "check_in_date": booking.stay_period.check_in,
            "check_out_date": booking.stay_period.check_out,
            "guest_name": booking.guest.name,
            "guest_email": booking.guest.email,
            "guest_count": booking.guest.count,
            "total_amount": str(booking.total_amount.amount),
            "currency": str(booking.total_amount.currency),
            "status": booking.status.value,
            "created_at": booking.created_at.isoformat(),
        }
        if booking.user_id is not None:
            item["user_id"] = str(booking.user_id)
            item["GSI1PK"] = f"USER#{booking.user_id}"
            item["GSI1SK"] = f"HOTEL#{booking.hotel_id}#BOOKING#{booking.id}"
        if booking.redemption is not None:
            item["points_redeemed"] = booking.redemption.points
            item["discount_amount"] = str(booking.redemption.discount.amount)
            item["redemption_transaction_id"] = booking.redemption.transaction_id

        try:
            self.table.put_item(Item=item, ConditionExpression=Attr("PK").not_exists())
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise DuplicateResourceException(
                    f"Booking already exists: {booking.id}"
                )
            raise

    def find_by_id(self, booking_id: BookingId) -> Booking | None:
        """予約IDで検索"""
        response = self.table.get_item(
            Key={"PK": f"BOOKING#{booking_id}", "SK": "METADATA"},
            ConsistentRead=True,
        )
        item = response.get("Item")
        if not item:
            return None
        return self._to_entity(item)

    def find_by_user_and_hotel(
        self, user_id: UserId, hotel_id: HotelId
    ) -> list[Booking]:
        """ユーザーの同一ホテルでの予約を検索する"""
        response = self.table.query(
            IndexName="GSI1",
            KeyConditionExpression=Key("GSI1PK").eq(f"USER#{user_id}")
            & Key("GSI1SK").begins_with(f"HOTEL#{hotel_id}#BOOKING#"),
        )
        return [self._to_entity(item) for item in response.get("Items", [])]

    def update(
        self, booking: Booking, expected_status: BookingStatus | None = None
    ) -> None:
        """予約のステータスを更新する"""
        kwargs: dict = {
            "Key": {"PK": f"BOOKING#{booking.id}", "SK": "METADATA"},
            "UpdateExpression": "SET #status = :status",
            "ExpressionAttributeNames": {"#status": "status"},
            "ExpressionAttributeValues": {":status": booking.status.value},
        }

        if expected_status is not None:
            kwargs["ConditionExpression"] = Attr("status").eq(expected_status.value)

        try:
            self.table.update_item(**kwargs)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                raise OptimisticLockException(
                    f"Booking status conflict: "
                    f"expected {expected_status}, "
                    f"booking_id={booking.id}"
                )
            raise

    def _to_entity(self, item: dict) -> Booking:
        """DynamoDB アイテムをドメインエンティティに変換する"""
        currency = Currency(item["currency"])
        redemption = None
        if item.get("points_redeemed"):
            redemption = LoyaltyRedemption(
                points=int(item["points_redeemed"]),
                discount=Money(
                    amount=Decimal(item["discount_amount"]), currency=currency
                ),
                transaction_id=item["redemption_transaction_id"],
            )
        user_id = item.get("user_id")
        return Booking(
            id=BookingId(value=item["booking_id"]),
            hotel_id=HotelId(value=item["hotel_id"]),
            user_id=UserId(value=user_id) if user_id else None,
            stay_period=StayPeriod(
                check_in=item["check_in_date"],
                check_out=item["check_out_date"],
            ),
            guest=GuestInfo(
                name=item["guest_name"],
                email=item["guest_email"],
                count=int(item["guest_count"]),
            ),
            total_amount=Money(amount=Decimal(item["total_amount"]), currency=currency),
            created_at=datetime.fromisoformat(item["created_at"]),
            status=BookingStatus(item["status"]),
            redemption=redemption,
        )
