import json

from pydantic import BaseModel, ValidationError

from hotel_reservation.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    RefundFailedException,
    ResourceNotFoundException,
    ResourceUnavailableException,
    UnauthorizedException,
    ValidationException,
)


class ErrorResponse(BaseModel):
    """エラーレスポンスモデル"""

    status: str = "error"
    error_code: str
    message: str
    details: list | None = None


# 上から順に isinstance で判定する（サブクラスを先に並べる）
_DOMAIN_ERRORS: list[tuple[type[DomainException], int, str]] = [
    (ValidationException, 400, "VALIDATION_ERROR"),
    (UnauthorizedException, 403, "FORBIDDEN"),
    (ResourceNotFoundException, 404, "NOT_FOUND"),
    (ResourceUnavailableException, 409, "RESOURCE_UNAVAILABLE"),
    (OptimisticLockException, 409, "CONFLICT"),
    (DuplicateResourceException, 409, "CONFLICT"),
    (BusinessRuleViolationException, 422, "BUSINESS_RULE_VIOLATION"),
    (RefundFailedException, 502, "REFUND_FAILED"),
]


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway HTTP API のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(
    status_code: int, error_code: str, message: str, details: list | None = None
) -> dict:
    """エラーレスポンスを生成"""
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
    ).model_dump(exclude_none=True)
    return api_response(status_code, body)


def domain_error_response(e: DomainException) -> dict:
    """ドメイン例外を対応する HTTP ステータスのレスポンスに変換する"""
    for exception_type, status_code, error_code in _DOMAIN_ERRORS:
        if isinstance(e, exception_type):
            details = e.errors if isinstance(e, ValidationException) else None
            return error_response(status_code, error_code, str(e), details)
    return error_response(400, "DOMAIN_ERROR", str(e))


def request_validation_error_response(e: ValidationError) -> dict:
    """リクエストボディの検証エラーを 400 レスポンスに変換する"""
    details = [
        {"loc": list(err["loc"]), "msg": err["msg"]}
        for err in e.errors(include_url=False)
    ]
    return error_response(400, "VALIDATION_ERROR", "Invalid request body", details)
