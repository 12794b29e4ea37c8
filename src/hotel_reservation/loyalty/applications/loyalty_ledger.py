from datetime import datetime, timezone
from typing import Callable

from hotel_reservation.loyalty.applications.redemption_result import (
    RedemptionResult,
)
from hotel_reservation.loyalty.domain.entity import LoyaltyAccount, PointsTransaction
from hotel_reservation.loyalty.domain.enum import TransactionKind
from hotel_reservation.loyalty.domain.factory import PointsTransactionFactory
from hotel_reservation.loyalty.domain.repository import LoyaltyRepository
from hotel_reservation.loyalty.domain.service import PointsPolicy
from hotel_reservation.loyalty.domain.value_object import PointsTransactionId
from hotel_reservation.shared.domain import BookingId, Currency, Money, UserId
from hotel_reservation.shared.domain.exception import (
    InsufficientPointsException,
    ResourceNotFoundException,
    ValidationException,
)
from hotel_reservation.shared.utils import get_logger

logger = get_logger("loyalty-service")

MAX_PAGE_SIZE = 100


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LoyaltyLedger:
    """ポイント台帳のユースケース

    予約に紐づく操作（付与・引き換えの戻し・取消）は予約ごとに冪等。
    """

    def __init__(
        self,
        repository: LoyaltyRepository,
        factory: PointsTransactionFactory,
        policy: PointsPolicy,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repository = repository
        self._factory = factory
        self._policy = policy
        self._clock = clock

    def award(self, user_id: UserId, booking_id: BookingId, paid_amount: Money) -> int:
        """支払額に応じてポイントを付与する

        既に付与済みの予約なら 0 を返す。
        """
        points = self._policy.calculate_points(paid_amount)
        if points <= 0:
            return 0

        transaction = self._factory.earn(user_id, booking_id, points, self._clock())
        if not self._repository.append_transaction(transaction):
            logger.warning(
                "Points already awarded for booking",
                extra={"user_id": str(user_id), "booking_id": str(booking_id)},
            )
            return 0

        logger.info(
            "Points awarded",
            extra={
                "user_id": str(user_id),
                "booking_id": str(booking_id),
                "points": points,
            },
        )
        return points

    def redeem(
        self, user_id: UserId, points: int, currency: Currency
    ) -> RedemptionResult:
        """ポイントを割引に引き換える"""
        if points <= 0:
            raise ValidationException(["Points to redeem must be greater than zero."])

        account = self._repository.find_by_id(user_id)
        if account is None:
            raise InsufficientPointsException(
                "Loyalty account not found. Please create an account first."
            )

        discount = self._policy.calculate_discount(points, currency)
        transaction = self._factory.redeem(user_id, points, discount, self._clock())
        # 残高不足はここで検出する。並行更新はリポジトリの条件付き書き込みが検出する
        account.apply(transaction)
        self._repository.append_transaction(transaction)

        logger.info(
            "Points redeemed",
            extra={
                "user_id": str(user_id),
                "points": points,
                "discount": str(discount),
            },
        )
        return RedemptionResult(
            points_redeemed=points,
            discount_amount=discount,
            remaining_balance=account.points_balance,
            transaction_id=transaction.id,
        )

    def link_redemption(
        self,
        user_id: UserId,
        transaction_id: PointsTransactionId,
        booking_id: BookingId,
    ) -> None:
        """引き換え取引に予約IDを紐づける"""
        self._repository.link_booking(user_id, transaction_id, booking_id)

    def reverse_redemption(
        self, user_id: UserId, booking_id: BookingId | None, points: int
    ) -> int:
        """引き換えたポイントを口座に戻す"""
        if points <= 0:
            return 0

        transaction = self._factory.redemption_reversal(
            user_id, booking_id, points, self._clock()
        )
        if not self._repository.append_transaction(transaction):
            logger.warning(
                "Redemption already reversed",
                extra={"user_id": str(user_id), "booking_id": str(booking_id)},
            )
            return 0

        logger.info(
            "Redemption reversed",
            extra={
                "user_id": str(user_id),
                "booking_id": str(booking_id),
                "points": points,
            },
        )
        return points

    def revoke_earned(self, user_id: UserId, booking_id: BookingId) -> int:
        """予約で付与したポイントを取り消す

        使用済みでも取り消すため、残高が負になることがある。
        """
        earned = self._repository.find_transaction(
            user_id, PointsTransactionId.for_booking(TransactionKind.EARN, booking_id)
        )
        if earned is None:
            return 0

        transaction = self._factory.revocation(earned, self._clock())
        if not self._repository.append_transaction(transaction):
            return 0

        logger.info(
            "Earned points revoked",
            extra={
                "user_id": str(user_id),
                "booking_id": str(booking_id),
                "points": earned.points,
            },
        )
        return earned.points

    def points_earned_for(self, user_id: UserId, booking_id: BookingId) -> int:
        """予約で付与されたポイント数（未付与なら 0）"""
        earned = self._repository.find_transaction(
            user_id, PointsTransactionId.for_booking(TransactionKind.EARN, booking_id)
        )
        return earned.points if earned else 0

    def get_account(self, user_id: UserId) -> LoyaltyAccount:
        account = self._repository.find_by_id(user_id)
        if account is None:
            raise ResourceNotFoundException(
                f"Loyalty account not found for user {user_id}"
            )
        return account

    def create_account(self, user_id: UserId) -> LoyaltyAccount:
        """口座を作成する。既にある場合は DuplicateResourceException"""
        account = LoyaltyAccount(id=user_id, last_updated=self._clock())
        self._repository.save(account)
        logger.info("Created loyalty account", extra={"user_id": str(user_id)})
        return account

    def history(
        self, user_id: UserId, page: int = 1, page_size: int = 10
    ) -> list[PointsTransaction]:
        """取引履歴を新しい順に返す"""
        errors = []
        if page < 1:
            errors.append("Page number must be at least 1.")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            errors.append(f"Page size must be between 1 and {MAX_PAGE_SIZE}.")
        if errors:
            raise ValidationException(errors)

        transactions = sorted(
            self._repository.find_transactions(user_id),
            key=lambda t: t.created_at,
            reverse=True,
        )
        start = (page - 1) * page_size
        return transactions[start : start + page_size]

    def calculate_points(self, amount: Money) -> int:
        return self._policy.calculate_points(amount)

    def calculate_discount(self, points: int, currency: Currency) -> Money:
        return self._policy.calculate_discount(points, currency)
