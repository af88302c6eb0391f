from datetime import datetime

import pytest

from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)
from src.service.restaurant_booking.domain.schedule_exception_guard import ScheduleExceptionGuard
from src.service.restaurant_booking.domain.value_object.restaurant_calendar import (
    RestaurantCalendarSnapshot,
)
from src.service.restaurant_booking.domain.value_object.table_snapshot import TableSnapshot
from test.constants import (
    ANOTHER_DINER_ID,
    ANOTHER_OWNER_ID,
    CLOSE_TIME,
    CLOSED_RESTAURANT_ID,
    DINER_ID,
    FOREIGN_TABLE_ID,
    OPEN_TIME,
    OTHER_RESTAURANT_ID,
    OTHER_TABLE_ID,
    OWNER_ID,
    RESTAURANT_ID,
    SECTION_ID,
    TABLE_CAPACITY,
    TABLE_ID,
    WEEKDAYS_OPEN,
)
from test.service.restaurant_booking.fakes import (
    FakeOwnershipAssertion,
    FakeRestaurantCalendarProvider,
    FakeTableDirectoryProvider,
    FakeUserExistence,
    InMemoryReservationRepo,
    InMemoryScheduleExceptionRepo,
    RecordingEventPublisher,
)


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def schedule_exception_repo() -> InMemoryScheduleExceptionRepo:
    return InMemoryScheduleExceptionRepo()


@pytest.fixture
def calendar_provider(
    schedule_exception_repo: InMemoryScheduleExceptionRepo,
) -> FakeRestaurantCalendarProvider:
    provider = FakeRestaurantCalendarProvider(schedule_exception_repo=schedule_exception_repo)
    provider.add(
        RestaurantCalendarSnapshot(
            restaurant_id=RESTAURANT_ID,
            open_time=OPEN_TIME,
            close_time=CLOSE_TIME,
            days_open=WEEKDAYS_OPEN,
            owner_id=OWNER_ID,
        )
    )
    provider.add(
        RestaurantCalendarSnapshot(
            restaurant_id=OTHER_RESTAURANT_ID,
            open_time='11:00',
            close_time='23:00',
            days_open=['monday', 'sunday'],
            owner_id=ANOTHER_OWNER_ID,
        )
    )
    provider.add(
        RestaurantCalendarSnapshot(
            restaurant_id=CLOSED_RESTAURANT_ID,
            open_time=OPEN_TIME,
            close_time=CLOSE_TIME,
            days_open=WEEKDAYS_OPEN,
            active=False,
            owner_id=OWNER_ID,
        )
    )
    return provider


@pytest.fixture
def table_directory() -> FakeTableDirectoryProvider:
    directory = FakeTableDirectoryProvider()
    directory.add(
        TableSnapshot(
            table_id=TABLE_ID,
            section_id=SECTION_ID,
            restaurant_id=RESTAURANT_ID,
            capacity=TABLE_CAPACITY,
        )
    )
    directory.add(
        TableSnapshot(
            table_id=OTHER_TABLE_ID, section_id=SECTION_ID, restaurant_id=RESTAURANT_ID, capacity=2
        )
    )
    directory.add(
        TableSnapshot(
            table_id=FOREIGN_TABLE_ID,
            section_id='terrace',
            restaurant_id=OTHER_RESTAURANT_ID,
            capacity=6,
        )
    )
    directory.add(
        TableSnapshot(
            table_id='table-inactive',
            section_id=SECTION_ID,
            restaurant_id=CLOSED_RESTAURANT_ID,
            capacity=4,
        )
    )
    return directory


@pytest.fixture
def user_existence() -> FakeUserExistence:
    return FakeUserExistence(DINER_ID, ANOTHER_DINER_ID, OWNER_ID)


@pytest.fixture
def domain_service(
    reservation_repo: InMemoryReservationRepo,
    table_directory: FakeTableDirectoryProvider,
    calendar_provider: FakeRestaurantCalendarProvider,
    user_existence: FakeUserExistence,
    now: datetime,
) -> ReservationDomainService:
    return ReservationDomainService(
        reservation_command_repo=reservation_repo,
        table_directory_provider=table_directory,
        restaurant_calendar_provider=calendar_provider,
        user_existence=user_existence,
        clock=lambda: now,
        max_advance_months=3,
        default_duration_minutes=90,
    )


@pytest.fixture
def schedule_exception_guard(
    schedule_exception_repo: InMemoryScheduleExceptionRepo,
) -> ScheduleExceptionGuard:
    return ScheduleExceptionGuard(schedule_exception_repo=schedule_exception_repo)


@pytest.fixture
def ownership_assertion(
    calendar_provider: FakeRestaurantCalendarProvider,
    reservation_repo: InMemoryReservationRepo,
) -> FakeOwnershipAssertion:
    return FakeOwnershipAssertion(
        calendar_provider=calendar_provider, reservation_repo=reservation_repo
    )


@pytest.fixture
def event_publisher() -> RecordingEventPublisher:
    return RecordingEventPublisher()
