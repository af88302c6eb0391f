from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.platform.types import UtilsUUID7
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)


class ScheduleExceptionCreateRequest(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {'start_date': '2025-01-10', 'end_date': '2025-01-15', 'reason': 'Renovation'}
        },
    }

    start_date: date
    end_date: date
    reason: Optional[str] = Field(default=None, max_length=255)


class ScheduleExceptionUpdateRequest(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = Field(default=None, max_length=255)


class ScheduleExceptionResponse(BaseModel):
    id: UtilsUUID7
    restaurant_id: str
    start_date: date
    end_date: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, schedule_exception: ScheduleException) -> 'ScheduleExceptionResponse':
        return cls(
            id=schedule_exception.id,
            restaurant_id=schedule_exception.restaurant_id,
            start_date=schedule_exception.start_date,
            end_date=schedule_exception.end_date,
            reason=schedule_exception.reason,
            created_at=schedule_exception.created_at,
            updated_at=schedule_exception.updated_at,
        )
