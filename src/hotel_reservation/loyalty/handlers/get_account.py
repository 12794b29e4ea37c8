from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEventV2,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from hotel_reservation.loyalty.applications import LoyaltyLedger
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.loyalty.handlers.response_models import to_account_response
from hotel_reservation.loyalty.infrastructure import DynamoDBLoyaltyRepository
from hotel_reservation.shared.config import LoyaltySettings
from hotel_reservation.shared.domain import Caller, UserId
from hotel_reservation.shared.domain.exception import (
    DomainException,
    DuplicateResourceException,
    ResourceNotFoundException,
    UnauthorizedException,
)
from hotel_reservation.shared.utils import (
    api_response,
    caller_from_event,
    domain_error_response,
)

logger = Logger()

RECENT_TRANSACTIONS = 10

repository = DynamoDBLoyaltyRepository()
ledger = LoyaltyLedger(
    repository=repository,
    factory=PointsTransactionFactory(),
    policy=PointsPolicy(LoyaltySettings.from_env()),
)


def _target_user(event: APIGatewayProxyEventV2, caller: Caller) -> UserId:
    """参照対象のユーザー（他人の口座は Admin のみ）"""
    if not caller.is_authenticated:
        raise UnauthorizedException("Authentication is required.")
    requested = (event.path_parameters or {}).get("user_id")
    if requested is None or caller.owns(UserId(value=requested)):
        return caller.user_id
    if not caller.can_manage_any_booking:
        raise UnauthorizedException("You can only view your own loyalty account.")
    return UserId(value=requested)


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEventV2)
def lambda_handler(event: APIGatewayProxyEventV2, context: LambdaContext) -> dict:
    """ロイヤルティ口座取得 Lambda Handler

    自分の口座が無い場合はその場で作成する。
    """
    try:
        caller = caller_from_event(event)
        user_id = _target_user(event, caller)
        logger.info("Fetching loyalty account", extra={"user_id": str(user_id)})

        try:
            account = ledger.get_account(user_id)
        except ResourceNotFoundException:
            if user_id != caller.user_id:
                raise
            try:
                account = ledger.create_account(user_id)
            except DuplicateResourceException:
                account = ledger.get_account(user_id)

        recent = ledger.history(user_id, page=1, page_size=RECENT_TRANSACTIONS)
        return api_response(200, to_account_response(account, recent))

    except DomainException as e:
        logger.warning("Loyalty account request rejected", extra={"error": str(e)})
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to fetch loyalty account")
        return api_response(500, {"message": "Internal server error"})
