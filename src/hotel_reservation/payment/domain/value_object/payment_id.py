from __future__ import annotations

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentId:
    """決済ID"""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> PaymentId:
        return cls(value=f"pay-{uuid.uuid4().hex}")
