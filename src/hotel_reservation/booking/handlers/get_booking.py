from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from hotel_reservation.booking.applications import GetBookingService
from hotel_reservation.booking.handlers.response_models import to_detail_response
from hotel_reservation.booking.handlers.wiring import (
    build_booking_repository,
    build_loyalty,
    build_payments,
)
from hotel_reservation.shared.config import PaymentSettings
from hotel_reservation.shared.domain import BookingId
from hotel_reservation.shared.domain.exception import DomainException
from hotel_reservation.shared.utils import (
    api_response,
    caller_from_event,
    domain_error_response,
)

logger = Logger()

service = GetBookingService(
    repository=build_booking_repository(),
    payments=build_payments(PaymentSettings.from_env()),
    loyalty=build_loyalty(),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約詳細取得 Lambda Handler"""
    booking_id = (event.path_parameters or {}).get("booking_id")
    if not booking_id:
        return api_response(400, {"message": "booking_id is required"})

    logger.info("Fetching booking details", extra={"booking_id": booking_id})

    try:
        view = service.get(BookingId(value=booking_id), caller_from_event(event))
        return api_response(200, to_detail_response(view))

    except DomainException as e:
        logger.warning("Get booking rejected", extra={"error": str(e)})
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to fetch booking details")
        return api_response(500, {"message": "Internal server error"})
