from dataclasses import dataclass


@dataclass(frozen=True)
class GuestInfo:
    """宿泊者情報

    人数の上限は予約ルール側で検証する。
    """

    name: str
    email: str
    count: int

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Guest name cannot be empty")
        if "@" not in self.email:
            raise ValueError("Guest email is invalid")
