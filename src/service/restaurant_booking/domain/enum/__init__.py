"""Restaurant Booking Domain Enums"""

from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.enum.weekday import Weekday


__all__ = ['ReservationStatus', 'Weekday']
