from .entity import LoyaltyAccount as LoyaltyAccount
from .entity import PointsTransaction as PointsTransaction
from .enum import TransactionKind as TransactionKind
from .factory import PointsTransactionFactory as PointsTransactionFactory
from .repository import LoyaltyRepository as LoyaltyRepository
from .service import PointsPolicy as PointsPolicy
from .value_object import PointsTransactionId as PointsTransactionId
