from .loyalty_repository import LoyaltyRepository as LoyaltyRepository
