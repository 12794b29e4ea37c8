from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from hotel_reservation.booking.applications import SettlePaymentService
from hotel_reservation.booking.handlers.request_models import SettlePaymentRequest
from hotel_reservation.booking.handlers.response_models import (
    to_settlement_response,
)
from hotel_reservation.booking.handlers.wiring import (
    build_booking_repository,
    build_inventory,
    build_loyalty,
    build_payments,
)
from hotel_reservation.shared.config import BookingSettings, PaymentSettings
from hotel_reservation.shared.domain import BookingId, Currency, Money
from hotel_reservation.shared.domain.exception import (
    DomainException,
    ValidationException,
)
from hotel_reservation.shared.utils import (
    api_response,
    caller_from_event,
    domain_error_response,
    request_validation_error_response,
)

logger = Logger()

booking_settings = BookingSettings.from_env()
payment_settings = PaymentSettings.from_env()
service = SettlePaymentService(
    repository=build_booking_repository(),
    payments=build_payments(payment_settings),
    inventory=build_inventory(),
    loyalty=build_loyalty(),
    settings=payment_settings,
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約の決済 Lambda Handler

    決済が拒否された場合は 402 を返す（予約はキャンセル済み）。
    """
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"message": "booking_id is required"})

    logger.info("Received payment request", extra={"booking_id": booking_id})

    try:
        request = SettlePaymentRequest.model_validate_json(event.body or "{}")
        try:
            currency = Currency(request.currency or booking_settings.currency)
        except ValueError as e:
            raise ValidationException([str(e)]) from e
        amount = Money(amount=request.amount, currency=currency)
        result = service.settle(
            BookingId(value=booking_id),
            amount,
            request.payment_method,
            caller_from_event(event),
        )
        status_code = 200 if result.payment.is_completed else 402
        return api_response(status_code, to_settlement_response(result))

    except ValidationError as e:
        return request_validation_error_response(e)
    except DomainException as e:
        logger.warning("Payment request rejected", extra={"error": str(e)})
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to process payment")
        return api_response(500, {"message": "Internal server error"})
