from .loyalty_ledger import LoyaltyLedger as LoyaltyLedger
from .redemption_result import RedemptionResult as RedemptionResult
