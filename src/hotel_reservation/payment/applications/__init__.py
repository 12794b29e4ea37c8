from .payment_gateway import SimulatedPaymentGateway as SimulatedPaymentGateway
from .payment_result import PaymentResult as PaymentResult
