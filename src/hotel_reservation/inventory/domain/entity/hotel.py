from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import AggregateRoot, Money


class Hotel(AggregateRoot[HotelId]):
    """ホテル（在庫に関係する属性のみ）

    available_rooms はリポジトリの条件付き更新でのみ増減させる。
    このエンティティが保持する値は読み取り時点のスナップショット。
    """

    def __init__(
        self,
        id: HotelId,
        name: str,
        nightly_rate: Money,
        available_rooms: int,
    ) -> None:
        super().__init__(id)
        if available_rooms < 0:
            raise ValueError("Available rooms cannot be negative")
        self._name = name
        self._nightly_rate = nightly_rate
        self._available_rooms = available_rooms

    @property
    def name(self) -> str:
        return self._name

    @property
    def nightly_rate(self) -> Money:
        return self._nightly_rate

    @property
    def available_rooms(self) -> int:
        return self._available_rooms

    def has_available_rooms(self) -> bool:
        return self._available_rooms > 0

    def price_for(self, nights: int) -> Money:
        """宿泊数 × 1 泊料金"""
        return self._nightly_rate.multiply(nights)
