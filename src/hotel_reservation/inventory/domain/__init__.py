from .entity import Hotel as Hotel
from .repository import HotelRepository as HotelRepository
from .value_object import HotelId as HotelId
