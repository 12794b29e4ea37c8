from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class TransactionId:
    """決済ゲートウェイの取引ID

    英大文字と数字からなる 12 文字の不透明な文字列。
    """

    ALPHABET: ClassVar[str] = string.ascii_uppercase + string.digits
    LENGTH: ClassVar[int] = 12

    value: str

    def __post_init__(self) -> None:
        if len(self.value) != self.LENGTH or any(
            c not in self.ALPHABET for c in self.value
        ):
            raise ValueError(f"Invalid transaction id: {self.value}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> TransactionId:
        return cls(value="".join(secrets.choice(cls.ALPHABET) for _ in range(cls.LENGTH)))
