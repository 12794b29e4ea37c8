from abc import abstractmethod

from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain import Repository


class HotelRepository(Repository[Hotel, HotelId]):
    """ホテル在庫レポジトリのインターフェース

    空室数の増減は必ずストレージ側の原子的な条件付き更新で行う。
    アプリケーション側で read-modify-write をしてはならない。
    """

    @abstractmethod
    def save(self, hotel: Hotel) -> None:
        """ホテルを登録する"""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, hotel_id: HotelId) -> Hotel | None:
        """ホテルIDで検索する"""
        raise NotImplementedError

    @abstractmethod
    def decrement_available_rooms(self, hotel_id: HotelId) -> bool:
        """空室数が 1 以上のときに限り 1 減らす

        Returns:
            True: 減算した / False: 空室がなかった
        """
        raise NotImplementedError

    @abstractmethod
    def increment_available_rooms(self, hotel_id: HotelId) -> None:
        """空室数を無条件に 1 増やす"""
        raise NotImplementedError
