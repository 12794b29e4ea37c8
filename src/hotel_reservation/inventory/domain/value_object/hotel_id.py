from dataclasses import dataclass


@dataclass(frozen=True)
class HotelId:
    """ホテルID"""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("HotelId cannot be empty")

    def __str__(self) -> str:
        return self.value
