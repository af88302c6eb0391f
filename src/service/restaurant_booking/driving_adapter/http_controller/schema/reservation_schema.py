from datetime import date, datetime, time
from typing import Literal, Optional

from pydantic import BaseModel, Field

from src.platform.types import UtilsUUID7
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.value_object.table_hold import TableSelectionResult


class ReservationCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'restaurant_id': 'r-1',
                'table_id': 't-7',
                'reservation_date': '2025-03-10',
                'reservation_time': '19:00',
                'number_of_guests': 2,
            }
        },
    }

    restaurant_id: str = Field(min_length=1)
    table_id: str = Field(min_length=1)
    reservation_date: date
    reservation_time: time
    number_of_guests: int = Field(ge=1)
    duration_minutes: Optional[int] = Field(default=None, gt=0)


class ReservationUpdateRequest(BaseModel):
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    number_of_guests: Optional[int] = Field(default=None, ge=1)
    duration_minutes: Optional[int] = Field(default=None, gt=0)


class ReservationStatusUpdateRequest(BaseModel):
    status: Literal['CONFIRMED', 'CANCELLED']


class ReservationResponse(BaseModel):
    id: UtilsUUID7  # UUID7
    restaurant_id: str
    user_id: str
    table_id: str
    reservation_date: date
    reservation_time: time
    number_of_guests: int
    duration_minutes: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationResponse':
        snapshot = reservation.snapshot()
        return cls(
            id=snapshot.id,
            restaurant_id=snapshot.restaurant_id,
            user_id=snapshot.user_id,
            table_id=snapshot.table_id,
            reservation_date=snapshot.reservation_date,
            reservation_time=snapshot.reservation_time,
            number_of_guests=snapshot.number_of_guests,
            duration_minutes=snapshot.duration_minutes,
            status=snapshot.status.value,
            created_at=snapshot.created_at,
            updated_at=snapshot.updated_at,
        )


class TableSelectRequest(BaseModel):
    restaurant_id: str = Field(min_length=1)
    session_id: Optional[str] = None


class TableSelectionResponse(BaseModel):
    success: bool
    table_id: str
    selected_by: Optional[str] = None
    expires_at: Optional[datetime] = None
    message: Optional[str] = None

    @classmethod
    def from_result(cls, result: TableSelectionResult) -> 'TableSelectionResponse':
        return cls(
            success=result.success,
            table_id=result.table_id,
            selected_by=result.selected_by,
            expires_at=result.expires_at,
            message=result.message,
        )


class TableReleaseResponse(BaseModel):
    table_id: str
    released: bool
