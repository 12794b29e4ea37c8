from enum import Enum


class TransactionKind(str, Enum):
    """ポイント取引の種別"""

    EARN = "EARN"
    REDEEM = "REDEEM"
    REDEMPTION_REVERSAL = "REDEMPTION_REVERSAL"
    REVOCATION = "REVOCATION"
