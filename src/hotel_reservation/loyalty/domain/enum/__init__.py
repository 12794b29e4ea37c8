from .transaction_kind import TransactionKind as TransactionKind
