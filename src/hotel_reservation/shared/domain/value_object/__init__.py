from .booking_id import BookingId as BookingId
from .caller import Caller as Caller
from .caller import Role as Role
from .currency import Currency as Currency
from .money import Money as Money
from .user_id import UserId as UserId
