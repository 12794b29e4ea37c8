from .dynamodb_hotel_repository import (
    DynamoDBHotelRepository as DynamoDBHotelRepository,
)
