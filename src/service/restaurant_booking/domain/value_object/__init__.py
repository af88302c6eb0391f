from src.service.restaurant_booking.domain.value_object.reservation_request import (
    ReservationCancellationRequest,
    ReservationScheduleRequest,
    ReservationStatusChangeRequest,
    ReservationUpdateRequest,
)
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)
from src.service.restaurant_booking.domain.value_object.table_hold import (
    TableHold,
    TableSelectionResult,
)
from src.service.restaurant_booking.domain.value_object.table_snapshot import TableSnapshot
from src.service.restaurant_booking.domain.value_object.time_window import (
    DateRange,
    TimeWindow,
    intervals_overlap,
)


__all__ = [
    'DateRange',
    'ReservationCancellationRequest',
    'ReservationScheduleRequest',
    'ReservationStatusChangeRequest',
    'ReservationUpdateRequest',
    'RestaurantCalendarSnapshot',
    'TableHold',
    'TableSelectionResult',
    'TableSnapshot',
    'TimeWindow',
    'intervals_overlap',
]
