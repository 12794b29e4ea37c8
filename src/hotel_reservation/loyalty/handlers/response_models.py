from __future__ import annotations

from pydantic import BaseModel

from hotel_reservation.loyalty.domain.entity import LoyaltyAccount, PointsTransaction


class PointsTransactionData(BaseModel):
    """ポイント取引データのレスポンスモデル"""

    transaction_id: str
    kind: str
    points: int
    description: str
    created_at: str
    booking_id: str | None = None


class LoyaltyAccountData(BaseModel):
    """ロイヤルティ口座データのレスポンスモデル"""

    user_id: str
    points_balance: int
    total_points_earned: int
    last_updated: str | None = None
    recent_transactions: list[PointsTransactionData] = []


class AccountResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: LoyaltyAccountData


class HistoryResponse(BaseModel):
    """取引履歴の成功レスポンスモデル"""

    status: str = "success"
    data: list[PointsTransactionData]
    page: int
    page_size: int


def to_transaction_data(transaction: PointsTransaction) -> PointsTransactionData:
    return PointsTransactionData(
        transaction_id=str(transaction.id),
        kind=transaction.kind.value,
        points=transaction.points,
        description=transaction.description,
        created_at=transaction.created_at.isoformat(),
        booking_id=str(transaction.booking_id) if transaction.booking_id else None,
    )


def to_account_response(
    account: LoyaltyAccount, recent: list[PointsTransaction]
) -> dict:
    """LoyaltyAccount エンティティをレスポンス辞書に変換する"""
    return AccountResponse(
        data=LoyaltyAccountData(
            user_id=str(account.user_id),
            points_balance=account.points_balance,
            total_points_earned=account.total_points_earned,
            last_updated=(
                account.last_updated.isoformat() if account.last_updated else None
            ),
            recent_transactions=[to_transaction_data(t) for t in recent],
        )
    ).model_dump()
