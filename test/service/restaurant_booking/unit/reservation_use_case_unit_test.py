"""
Unit tests for the reservation use cases

Test Focus:
1. Successful commands publish exactly one reservation event
2. Owner routes are gated by restaurant ownership, admins bypass the gate
3. A failed or repeated command publishes nothing
"""

from datetime import time
from unittest.mock import AsyncMock, Mock

import pytest

from src.platform.exception.exceptions import ForbiddenError
from src.platform.types import new_uuid7
from src.service.restaurant_booking.app.command.cancel_reservation_use_case import (
    CancelReservationUseCase,
)
from src.service.restaurant_booking.app.command.change_reservation_status_use_case import (
    ChangeReservationStatusUseCase,
)
from src.service.restaurant_booking.app.command.delete_reservation_use_case import (
    DeleteReservationUseCase,
)
from src.service.restaurant_booking.app.command.schedule_reservation_use_case import (
    ScheduleReservationUseCase,
)
from src.service.restaurant_booking.app.command.update_reservation_use_case import (
    UpdateReservationUseCase,
)
from src.service.restaurant_booking.app.query.get_reservation_use_case import (
    GetReservationUseCase,
)
from src.service.restaurant_booking.domain.domain_event.reservation_domain_event import (
    ReservationEventType,
)
from src.service.restaurant_booking.domain.entity.reservation_entity import Reservation
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)
from src.service.restaurant_booking.domain.reservation_errors import (
    ReservationNotFoundError,
    ReservationOwnershipError,
    TableConflictError,
)
from test.constants import (
    ANOTHER_DINER_ID,
    ANOTHER_OWNER_ID,
    DINER_ID,
    MONDAY,
    OTHER_RESTAURANT_ID,
    OWNER_ID,
    RESTAURANT_ID,
    TABLE_ID,
)
from test.service.restaurant_booking.fakes import (
    FakeOwnershipAssertion,
    InMemoryReservationRepo,
    RecordingEventPublisher,
)


@pytest.fixture
def hold_coordinator() -> Mock:
    return AsyncMock()


@pytest.fixture
def schedule_use_case(
    domain_service: ReservationDomainService,
    hold_coordinator: Mock,
    event_publisher: RecordingEventPublisher,
) -> ScheduleReservationUseCase:
    return ScheduleReservationUseCase(
        reservation_domain_service=domain_service,
        table_hold_coordinator=hold_coordinator,
        event_publisher=event_publisher,
    )


async def _book(use_case: ScheduleReservationUseCase, at: time = time(19, 0)) -> Reservation:
    return await use_case.execute(
        user_id=DINER_ID,
        restaurant_id=RESTAURANT_ID,
        table_id=TABLE_ID,
        reservation_date=MONDAY,
        reservation_time=at,
        number_of_guests=2,
    )


@pytest.mark.unit
class TestScheduleReservationUseCase:
    @pytest.mark.asyncio
    async def test_schedules_consumes_hold_and_publishes(
        self,
        schedule_use_case: ScheduleReservationUseCase,
        hold_coordinator: Mock,
        event_publisher: RecordingEventPublisher,
        reservation_repo: InMemoryReservationRepo,
    ) -> None:
        reservation = await _book(schedule_use_case)

        assert reservation.status == ReservationStatus.PENDING
        assert await reservation_repo.get_by_id(reservation_id=reservation.id) == reservation
        hold_coordinator.consume.assert_awaited_once_with(table_id=TABLE_ID, user_id=DINER_ID)
        assert [e.type for e in event_publisher.events] == [ReservationEventType.CREATED]
        assert event_publisher.events[0].reservation_id == reservation.id
        assert event_publisher.events[0].data['reservation_time'] == '19:00'

    @pytest.mark.asyncio
    async def test_conflict_publishes_nothing(
        self,
        schedule_use_case: ScheduleReservationUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        await _book(schedule_use_case)

        with pytest.raises(TableConflictError):
            await _book(schedule_use_case, at=time(19, 30))

        assert len(event_publisher.events) == 1


@pytest.mark.unit
class TestOwnerGatedUseCases:
    @pytest.fixture
    async def booked(self, schedule_use_case: ScheduleReservationUseCase) -> Reservation:
        return await _book(schedule_use_case)

    @pytest.fixture
    def update_use_case(
        self,
        domain_service: ReservationDomainService,
        ownership_assertion: FakeOwnershipAssertion,
        event_publisher: RecordingEventPublisher,
    ) -> UpdateReservationUseCase:
        return UpdateReservationUseCase(
            reservation_domain_service=domain_service,
            ownership_assertion=ownership_assertion,
            event_publisher=event_publisher,
        )

    @pytest.fixture
    def cancel_use_case(
        self,
        domain_service: ReservationDomainService,
        ownership_assertion: FakeOwnershipAssertion,
        event_publisher: RecordingEventPublisher,
    ) -> CancelReservationUseCase:
        return CancelReservationUseCase(
            reservation_domain_service=domain_service,
            ownership_assertion=ownership_assertion,
            event_publisher=event_publisher,
        )

    @pytest.fixture
    def status_use_case(
        self,
        domain_service: ReservationDomainService,
        ownership_assertion: FakeOwnershipAssertion,
        event_publisher: RecordingEventPublisher,
    ) -> ChangeReservationStatusUseCase:
        return ChangeReservationStatusUseCase(
            reservation_domain_service=domain_service,
            ownership_assertion=ownership_assertion,
            event_publisher=event_publisher,
        )

    @pytest.fixture
    def delete_use_case(
        self,
        domain_service: ReservationDomainService,
        ownership_assertion: FakeOwnershipAssertion,
        event_publisher: RecordingEventPublisher,
    ) -> DeleteReservationUseCase:
        return DeleteReservationUseCase(
            reservation_domain_service=domain_service,
            ownership_assertion=ownership_assertion,
            event_publisher=event_publisher,
        )

    @pytest.mark.asyncio
    async def test_diner_reschedules_own_reservation(
        self,
        booked: Reservation,
        update_use_case: UpdateReservationUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        updated = await update_use_case.execute(
            reservation_id=booked.id, user_id=DINER_ID, reservation_time=time(18, 0)
        )

        assert updated.reservation_time == time(18, 0)
        assert event_publisher.events[-1].type == ReservationEventType.UPDATED

    @pytest.mark.asyncio
    async def test_owner_of_another_restaurant_is_forbidden(
        self,
        booked: Reservation,
        update_use_case: UpdateReservationUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        with pytest.raises(ForbiddenError):
            await update_use_case.execute(
                reservation_id=booked.id,
                user_id=ANOTHER_OWNER_ID,
                number_of_guests=3,
                owner_id=ANOTHER_OWNER_ID,
            )

        assert [e.type for e in event_publisher.events] == [ReservationEventType.CREATED]

    @pytest.mark.asyncio
    async def test_reservation_outside_the_route_restaurant_is_not_found(
        self, booked: Reservation, cancel_use_case: CancelReservationUseCase
    ) -> None:
        with pytest.raises(ReservationNotFoundError):
            await cancel_use_case.execute(
                reservation_id=booked.id,
                user_id=OWNER_ID,
                owner_id=OWNER_ID,
                restaurant_id=OTHER_RESTAURANT_ID,
            )

    @pytest.mark.asyncio
    async def test_owner_cancels_on_behalf_of_diner(
        self,
        booked: Reservation,
        cancel_use_case: CancelReservationUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        cancelled = await cancel_use_case.execute(
            reservation_id=booked.id,
            user_id=OWNER_ID,
            owner_id=OWNER_ID,
            restaurant_id=RESTAURANT_ID,
        )

        assert cancelled.status == ReservationStatus.CANCELLED
        assert event_publisher.events[-1].type == ReservationEventType.CANCELLED

    @pytest.mark.asyncio
    async def test_repeat_cancel_publishes_once(
        self,
        booked: Reservation,
        cancel_use_case: CancelReservationUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        await cancel_use_case.execute(reservation_id=booked.id, user_id=DINER_ID)
        again = await cancel_use_case.execute(reservation_id=booked.id, user_id=DINER_ID)

        assert again.status == ReservationStatus.CANCELLED
        assert [e.type for e in event_publisher.events] == [
            ReservationEventType.CREATED,
            ReservationEventType.CANCELLED,
        ]

    @pytest.mark.asyncio
    async def test_owner_cancelling_a_cancelled_reservation_publishes_nothing(
        self,
        booked: Reservation,
        cancel_use_case: CancelReservationUseCase,
        status_use_case: ChangeReservationStatusUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        await cancel_use_case.execute(reservation_id=booked.id, user_id=DINER_ID)
        published = len(event_publisher.events)

        result = await status_use_case.execute(
            reservation_id=booked.id, status=ReservationStatus.CANCELLED, owner_id=OWNER_ID
        )

        assert result.status == ReservationStatus.CANCELLED
        assert len(event_publisher.events) == published

    @pytest.mark.asyncio
    async def test_other_diner_cannot_cancel(
        self, booked: Reservation, cancel_use_case: CancelReservationUseCase
    ) -> None:
        with pytest.raises(ReservationOwnershipError):
            await cancel_use_case.execute(reservation_id=booked.id, user_id=ANOTHER_DINER_ID)

    @pytest.mark.asyncio
    async def test_owner_confirms(
        self,
        booked: Reservation,
        status_use_case: ChangeReservationStatusUseCase,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        confirmed = await status_use_case.execute(
            reservation_id=booked.id, status=ReservationStatus.CONFIRMED, owner_id=OWNER_ID
        )

        assert confirmed.status == ReservationStatus.CONFIRMED
        assert event_publisher.events[-1].type == ReservationEventType.STATUS_CHANGED

    @pytest.mark.asyncio
    async def test_admin_bypasses_ownership(
        self,
        booked: Reservation,
        delete_use_case: DeleteReservationUseCase,
        reservation_repo: InMemoryReservationRepo,
        event_publisher: RecordingEventPublisher,
    ) -> None:
        await delete_use_case.execute(
            reservation_id=booked.id, owner_id='admin-1', is_admin=True
        )

        assert await reservation_repo.get_by_id(reservation_id=booked.id) is None
        assert event_publisher.events[-1].type == ReservationEventType.DELETED


@pytest.mark.unit
class TestGetReservationUseCase:
    @pytest.fixture
    def use_case(
        self,
        reservation_repo: InMemoryReservationRepo,
        ownership_assertion: FakeOwnershipAssertion,
    ) -> GetReservationUseCase:
        return GetReservationUseCase(
            reservation_command_repo=reservation_repo, ownership_assertion=ownership_assertion
        )

    @pytest.mark.asyncio
    async def test_visible_to_diner_and_owner_only(
        self, schedule_use_case: ScheduleReservationUseCase, use_case: GetReservationUseCase
    ) -> None:
        booked = await _book(schedule_use_case)

        assert (await use_case.execute(reservation_id=booked.id, user_id=DINER_ID)).id == booked.id
        assert (await use_case.execute(reservation_id=booked.id, user_id=OWNER_ID)).id == booked.id
        with pytest.raises(ReservationOwnershipError):
            await use_case.execute(reservation_id=booked.id, user_id=ANOTHER_DINER_ID)

    @pytest.mark.asyncio
    async def test_missing_reservation(self, use_case: GetReservationUseCase) -> None:
        with pytest.raises(ReservationNotFoundError):
            await use_case.execute(reservation_id=new_uuid7(), user_id=DINER_ID)
