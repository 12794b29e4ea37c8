from .loyalty_account import LoyaltyAccount as LoyaltyAccount
from .points_transaction import PointsTransaction as PointsTransaction
