from .guest_info import GuestInfo as GuestInfo
from .loyalty_redemption import LoyaltyRedemption as LoyaltyRedemption
from .stay_period import StayPeriod as StayPeriod
