"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.restaurant_booking.driven_adapter.model.dining_table_model import (
    DiningTableModel,
)
from src.service.restaurant_booking.driven_adapter.model.reservation_model import (
    ReservationModel,
)
from src.service.restaurant_booking.driven_adapter.model.restaurant_model import RestaurantModel
from src.service.restaurant_booking.driven_adapter.model.schedule_exception_model import (
    ScheduleExceptionModel,
)


__all__ = [
    'DiningTableModel',
    'ReservationModel',
    'RestaurantModel',
    'ScheduleExceptionModel',
]
