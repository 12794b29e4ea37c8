from .hotel_id import HotelId as HotelId
