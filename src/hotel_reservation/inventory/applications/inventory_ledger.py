from hotel_reservation.inventory.domain.entity import Hotel
from hotel_reservation.inventory.domain.repository import HotelRepository
from hotel_reservation.inventory.domain.value_object import HotelId
from hotel_reservation.shared.domain.exception import ResourceNotFoundException
from hotel_reservation.shared.utils import get_logger

logger = get_logger("inventory-service")


class InventoryLedger:
    """客室在庫台帳

    予約トークンは発行しない。release を 1 予約につき高々 1 回に抑えるのは
    呼び出し側（予約ステータスの条件付き更新）の責務。
    """

    def __init__(self, repository: HotelRepository) -> None:
        self._repository = repository

    def get_hotel(self, hotel_id: HotelId) -> Hotel:
        hotel = self._repository.find_by_id(hotel_id)
        if hotel is None:
            raise ResourceNotFoundException(f"Hotel with ID {hotel_id} does not exist.")
        return hotel

    def reserve(self, hotel_id: HotelId) -> bool:
        """空室を 1 つ確保する。空室がなければ False（例外ではない）"""
        reserved = self._repository.decrement_available_rooms(hotel_id)
        if reserved:
            logger.info("Room reserved", extra={"hotel_id": str(hotel_id)})
        else:
            logger.info("No rooms available", extra={"hotel_id": str(hotel_id)})
        return reserved

    def release(self, hotel_id: HotelId) -> None:
        """確保済みの空室を 1 つ戻す"""
        self._repository.increment_available_rooms(hotel_id)
        logger.info("Room released", extra={"hotel_id": str(hotel_id)})
