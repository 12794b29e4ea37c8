from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from hotel_reservation.booking.applications import (
    BookingValidator,
    CreateBookingService,
)
from hotel_reservation.booking.domain.factory import BookingDetails, BookingFactory
from hotel_reservation.booking.handlers.request_models import CreateBookingRequest
from hotel_reservation.booking.handlers.response_models import to_create_response
from hotel_reservation.booking.handlers.wiring import (
    build_booking_repository,
    build_inventory,
    build_loyalty,
)
from hotel_reservation.shared.config import BookingSettings
from hotel_reservation.shared.domain.exception import DomainException
from hotel_reservation.shared.utils import (
    api_response,
    caller_from_event,
    domain_error_response,
    request_validation_error_response,
)

logger = Logger()

repository = build_booking_repository()
service = CreateBookingService(
    repository=repository,
    factory=BookingFactory(),
    validator=BookingValidator(BookingSettings.from_env(), repository),
    inventory=build_inventory(),
    loyalty=build_loyalty(),
)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """予約作成 Lambda Handler"""
    logger.info("Received create booking request")

    try:
        request = CreateBookingRequest.model_validate_json(event.body or "{}")
        caller = caller_from_event(event)

        details: BookingDetails = {
            "hotel_id": request.hotel_id,
            "check_in_date": request.check_in_date.isoformat(),
            "check_out_date": request.check_out_date.isoformat(),
            "guest_count": request.guest_count,
            "guest_name": request.guest_name,
            "guest_email": request.guest_email,
        }
        result = service.create(
            details, caller, points_to_redeem=request.points_to_redeem
        )
        return api_response(201, to_create_response(result))

    except ValidationError as e:
        return request_validation_error_response(e)
    except DomainException as e:
        logger.warning("Create booking rejected", extra={"error": str(e)})
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to create booking")
        return api_response(500, {"message": "Internal server error"})
