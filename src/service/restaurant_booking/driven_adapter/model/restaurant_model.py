from datetime import datetime, time
from typing import Optional

from sqlalchemy import ARRAY, Boolean, DateTime, String, Time
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.db_setting import Base


class RestaurantModel(Base):
    """Calendar-relevant slice of a restaurant; profile data lives with its owning service"""

    __tablename__ = 'restaurant'

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    open_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    close_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    # Weekday tokens, MONDAY..SUNDAY
    days_open: Mapped[list[str]] = mapped_column(ARRAY(String(9)), nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
