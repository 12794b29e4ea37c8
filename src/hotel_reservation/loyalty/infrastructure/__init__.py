from .dynamodb_loyalty_repository import (
    DynamoDBLoyaltyRepository as DynamoDBLoyaltyRepository,
)
