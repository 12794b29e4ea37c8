from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hotel_reservation.payment.domain.enum import PaymentMethod
from hotel_reservation.shared.utils import to_decimal


class CreateBookingRequest(BaseModel):
    """予約作成リクエストモデル

    人数の上限・宿泊日数などの業務ルールは BookingValidator で検証する。
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    hotel_id: str = Field(..., min_length=1)
    check_in_date: date
    check_out_date: date
    guest_count: int = Field(..., ge=1)
    guest_name: str = Field(..., min_length=1, max_length=100)
    guest_email: str = Field(
        ...,
        max_length=254,
        pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$",
    )
    points_to_redeem: int | None = Field(default=None, ge=0)


class SettlePaymentRequest(BaseModel):
    """予約の決済リクエストモデル

    カード払いの場合のみカード情報を必須とする。カード情報は保存しない。
    """

    amount: Decimal = Field(..., ge=0, description="決済金額（予約の合計金額と一致すること）")
    currency: str | None = Field(
        default=None,
        pattern="^[A-Z]{3}$",
        description="通貨コード（ISO 4217）。省略時は既定の通貨",
    )
    payment_method: PaymentMethod
    card_number: str | None = Field(default=None, pattern=r"^\d{13,19}$")
    card_holder_name: str | None = Field(default=None, min_length=2, max_length=100)
    expiry_month: str | None = Field(default=None, pattern=r"^(0[1-9]|1[0-2])$")
    expiry_year: str | None = Field(default=None, pattern=r"^\d{4}$")
    cvv: str | None = Field(default=None, pattern=r"^\d{3,4}$")

    @field_validator("amount", mode="before")
    @classmethod
    def convert_amount_to_decimal(cls, v):
        return to_decimal(v)

    @model_validator(mode="after")
    def require_card_details(self) -> "SettlePaymentRequest":
        if not self.payment_method.requires_card:
            return self

        errors = []
        if not self.card_number:
            errors.append("Card number is required for card payments.")
        if not self.card_holder_name:
            errors.append("Card holder name is required for card payments.")
        if not self.expiry_month or not self.expiry_year:
            errors.append("Card expiry date is required for card payments.")
        if not self.cvv:
            errors.append("CVV is required for card payments.")
        if errors:
            raise ValueError(" ".join(errors))
        return self
