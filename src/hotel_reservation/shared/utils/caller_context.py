from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEventV2

from hotel_reservation.shared.domain import Caller, Role, UserId

ROLE_CLAIM = "custom:role"


def caller_from_event(event: APIGatewayProxyEventV2) -> Caller:
    """JWT Authorizer のクレームから呼び出し元を組み立てる

    トークン発行・検証は API Gateway 側の責務。ここではクレームを読むだけ。
    クレームが無い場合はゲスト（匿名）として扱う。
    """
    claims = (
        event.raw_event.get("requestContext", {})
        .get("authorizer", {})
        .get("jwt", {})
        .get("claims", {})
    )
    subject = claims.get("sub")
    if not subject:
        return Caller.anonymous()

    try:
        role = Role(claims.get(ROLE_CLAIM, Role.GUEST.value))
    except ValueError:
        role = Role.GUEST
    return Caller(user_id=UserId(value=subject), role=role)
