from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from hotel_reservation.loyalty.applications import LoyaltyLedger
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.loyalty.handlers.response_models import (
    HistoryResponse,
    to_transaction_data,
)
from hotel_reservation.loyalty.infrastructure import DynamoDBLoyaltyRepository
from hotel_reservation.shared.config import LoyaltySettings
from hotel_reservation.shared.domain.exception import (
    DomainException,
    UnauthorizedException,
    ValidationException,
)
from hotel_reservation.shared.utils import (
    api_response,
    caller_from_event,
    domain_error_response,
)

logger = Logger()

repository = DynamoDBLoyaltyRepository()
ledger = LoyaltyLedger(
    repository=repository,
    factory=PointsTransactionFactory(),
    policy=PointsPolicy(LoyaltySettings.from_env()),
)


def _int_param(params: dict, name: str, default: int) -> int:
    value = params.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationException([f"{name} must be an integer."]) from None


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """ポイント取引履歴取得 Lambda Handler"""
    try:
        caller = caller_from_event(event)
        if not caller.is_authenticated:
            raise UnauthorizedException("Authentication is required.")

        params = event.query_string_parameters or {}
        page = _int_param(params, "page", 1)
        page_size = _int_param(params, "page_size", 10)

        transactions = ledger.history(caller.user_id, page=page, page_size=page_size)
        body = HistoryResponse(
            data=[to_transaction_data(t) for t in transactions],
            page=page,
            page_size=page_size,
        ).model_dump()
        return api_response(200, body)

    except DomainException as e:
        logger.warning("Points history request rejected", extra={"error": str(e)})
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to fetch points history")
        return api_response(500, {"message": "Internal server error"})
