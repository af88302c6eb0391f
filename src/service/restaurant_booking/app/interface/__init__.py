"""Application layer interfaces (Ports)"""

from src.service.restaurant_booking.app.interface.i_ownership_assertion import IOwnershipAssertion
from src.service.restaurant_booking.app.interface.i_reservation_command_repo import (
    IReservationCommandRepo,
)
from src.service.restaurant_booking.app.interface.i_reservation_event_publisher import (
    IReservationEventPublisher,
)
from src.service.restaurant_booking.app.interface.i_restaurant_calendar_provider import (
    IRestaurantCalendarProvider,
)
from src.service.restaurant_booking.app.interface.i_schedule_exception_repo import (
    IScheduleExceptionRepo,
)
from src.service.restaurant_booking.app.interface.i_table_directory_provider import (
    ITableDirectoryProvider,
)
from src.service.restaurant_booking.app.interface.i_table_hold_store import ITableHoldStore
from src.service.restaurant_booking.app.interface.i_user_existence import IUserExistence


__all__ = [
    'IOwnershipAssertion',
    'IReservationCommandRepo',
    'IReservationEventPublisher',
    'IRestaurantCalendarProvider',
    'IScheduleExceptionRepo',
    'ITableDirectoryProvider',
    'ITableHoldStore',
    'IUserExistence',
]
