from .booking_result import BookingResult as BookingResult
from .booking_result import BookingView as BookingView
from .booking_result import CancellationResult as CancellationResult
from .booking_result import SettlementResult as SettlementResult
from .booking_validator import BookingValidator as BookingValidator
from .cancel_booking import CancelBookingService as CancelBookingService
from .create_booking import CreateBookingService as CreateBookingService
from .get_booking import GetBookingService as GetBookingService
from .saga import Saga as Saga
from .settle_payment import SettlePaymentService as SettlePaymentService
