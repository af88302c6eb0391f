"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.restaurant_booking.app.command import (
    cancel_reservation_use_case,
    change_reservation_status_use_case,
    create_schedule_exception_use_case,
    delete_reservation_use_case,
    delete_schedule_exception_use_case,
    release_table_use_case,
    schedule_reservation_use_case,
    select_table_use_case,
    update_reservation_use_case,
    update_schedule_exception_use_case,
)
from src.service.restaurant_booking.app.query import (
    get_reservation_use_case,
    list_reservations_use_case,
    list_schedule_exceptions_use_case,
)
from src.service.restaurant_booking.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    schedule_reservation_use_case,
    update_reservation_use_case,
    cancel_reservation_use_case,
    change_reservation_status_use_case,
    delete_reservation_use_case,
    select_table_use_case,
    release_table_use_case,
    create_schedule_exception_use_case,
    update_schedule_exception_use_case,
    delete_schedule_exception_use_case,
    get_reservation_use_case,
    list_reservations_use_case,
    list_schedule_exceptions_use_case,
    role_auth,
]
