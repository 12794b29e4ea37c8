import json
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.loyalty.domain.entity import LoyaltyAccount
from hotel_reservation.shared.domain import BookingId, Caller, Money, Role, UserId
from hotel_reservation.shared.domain.exception import DuplicateResourceException

FIXED_NOW = datetime(2025, 6, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def user_id():
    """全テスト共通の UserId フィクスチャ"""
    return UserId(value="user-1")


@pytest.fixture
def booking_id():
    """全テスト共通の BookingId フィクスチャ"""
    return BookingId(value="bk-123")


@pytest.fixture
def guest_caller(user_id):
    return Caller(user_id=user_id, role=Role.GUEST)


@pytest.fixture
def mock_repository():
    """リポジトリのモックフィクスチャ"""
    return MagicMock()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def create_hotel():
    """Hotel を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        hotel_id: str = "hotel-1",
        name: str = "Grand Plaza Hotel",
        nightly_rate: Decimal = Decimal("100"),
        available_rooms: int = 5,
    ) -> Hotel:
        return Hotel(
            id=HotelId(value=hotel_id),
            name=name,
            nightly_rate=Money.usd(nightly_rate),
            available_rooms=available_rooms,
        )

    return _factory


class InMemoryHotelRepository:
    """HotelRepository のインメモリ実装（空室数は dict で保持）"""

    def __init__(self, *hotels: Hotel) -> None:
        self.hotels = {hotel.id: hotel for hotel in hotels}
        self.rooms = {hotel.id: hotel.available_rooms for hotel in hotels}

    def save(self, hotel):
        self.hotels[hotel.id] = hotel
        self.rooms[hotel.id] = hotel.available_rooms

    def find_by_id(self, hotel_id):
        hotel = self.hotels.get(hotel_id)
        if hotel is None:
            return None
        return Hotel(
            id=hotel.id,
            name=hotel.name,
            nightly_rate=hotel.nightly_rate,
            available_rooms=self.rooms[hotel_id],
        )

    def decrement_available_rooms(self, hotel_id):
        if self.rooms.get(hotel_id, 0) <= 0:
            return False
        self.rooms[hotel_id] -= 1
        return True

    def increment_available_rooms(self, hotel_id):
        self.rooms[hotel_id] += 1


class InMemoryLoyaltyRepository:
    """LoyaltyRepository のインメモリ実装

    DynamoDB の TransactWriteItems と同じく、取引の重複と残高不足を検出する。
    """

    def __init__(self) -> None:
        self.accounts: dict = {}
        self.transactions: dict = {}

    def save(self, account):
        if account.user_id in self.accounts:
            raise DuplicateResourceException("Loyalty account already exists")
        self.accounts[account.user_id] = account

    def find_by_id(self, user_id):
        account = self.accounts.get(user_id)
        if account is None:
            return None
        return LoyaltyAccount(
            id=account.user_id,
            points_balance=account.points_balance,
            total_points_earned=account.total_points_earned,
            last_updated=account.last_updated,
        )

    def append_transaction(self, transaction):
        key = (transaction.user_id, transaction.id)
        if key in self.transactions:
            return False
        account = self.accounts.get(transaction.user_id) or LoyaltyAccount(
            id=transaction.user_id
        )
        account.apply(transaction)
        self.accounts[transaction.user_id] = account
        self.transactions[key] = transaction
        return True

    def find_transaction(self, user_id, transaction_id):
        return self.transactions.get((user_id, transaction_id))

    def find_transactions(self, user_id):
        return [t for (owner, _), t in self.transactions.items() if owner == user_id]

    def link_booking(self, user_id, transaction_id, booking_id):
        self.transactions[(user_id, transaction_id)].link_to(booking_id)


@pytest.fixture
def loyalty_repository():
    return InMemoryLoyaltyRepository()


@pytest.fixture
def hotel_repository_factory():
    return InMemoryHotelRepository


@pytest.fixture
def api_event():
    """API Gateway HTTP API (payload v2) のイベントを生成する Factory fixture"""

    def _factory(
        body: dict | None = None,
        path_parameters: dict | None = None,
        query: dict | None = None,
        sub: str | None = "user-1",
        role: str = "Guest",
    ) -> dict:
        request_context: dict = {"http": {"method": "GET", "path": "/"}}
        if sub is not None:
            request_context["authorizer"] = {
                "jwt": {"claims": {"sub": sub, "custom:role": role}}
            }
        return {
            "version": "2.0",
            "routeKey": "$default",
            "rawPath": "/",
            "headers": {"content-type": "application/json"},
            "requestContext": request_context,
            "pathParameters": path_parameters,
            "queryStringParameters": query,
            "body": json.dumps(body) if body is not None else None,
            "isBase64Encoded": False,
        }

    return _factory
