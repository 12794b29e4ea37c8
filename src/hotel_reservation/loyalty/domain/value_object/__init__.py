from .points_transaction_id import PointsTransactionId as PointsTransactionId
