from enum import Enum


class PaymentMethod(str, Enum):
    """支払い方法"""

    CREDIT_CARD = "CreditCard"
    DEBIT_CARD = "DebitCard"
    PAYPAL = "PayPal"
    BANK_TRANSFER = "BankTransfer"

    @property
    def requires_card(self) -> bool:
        return self in (PaymentMethod.CREDIT_CARD, PaymentMethod.DEBIT_CARD)
