from .points_transaction_factory import (
    PointsTransactionFactory as PointsTransactionFactory,
)
