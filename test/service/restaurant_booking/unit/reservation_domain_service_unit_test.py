"""
Unit tests for ReservationDomainService

Test Focus:
1. Scheduling rules: operating days and hours, blackouts, capacity, booking horizon
2. Table conflicts on the half-open [start, start + duration) window
   and a diner never holds two overlapping reservations
3. Rescheduling never conflicts with the reservation being moved
4. A storage-level conflict (lost race) surfaces as TableConflictError
"""

import random
from datetime import date, datetime, time, timedelta
from unittest.mock import AsyncMock

import pytest
from uuid_utils import UUID

from src.platform.exception.exceptions import ConflictError
from src.platform.types import new_uuid7
from src.service.restaurant_booking.domain.entity.schedule_exception_entity import (
    ScheduleException,
)
from src.service.restaurant_booking.domain.enum.reservation_status import ReservationStatus
from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)
from src.service.restaurant_booking.domain.reservation_errors import (
    InvalidStateTransitionError,
    MaxAdvanceWindowError,
    OutsideOperatingHoursError,
    ReservationNotFoundError,
    ReservationOwnershipError,
    RestaurantClosedByExceptionError,
    RestaurantNotBookableError,
    TableCapacityExceededError,
    TableConflictError,
    TableNotFoundError,
    TableRestaurantMismatchError,
    UserNotFoundError,
    UserTimeConflictError,
    ValidationError,
)
from src.service.restaurant_booking.domain.value_object.reservation_request import (
    ReservationCancellationRequest,
    ReservationScheduleRequest,
    ReservationStatusChangeRequest,
    ReservationUpdateRequest,
)
from test.constants import (
    ANOTHER_DINER_ID,
    CLOSED_RESTAURANT_ID,
    DINER_ID,
    FOREIGN_TABLE_ID,
    MONDAY,
    OTHER_TABLE_ID,
    RESTAURANT_ID,
    SUNDAY,
    TABLE_ID,
)
from test.service.restaurant_booking.fakes import (
    FakeUserExistence,
    InMemoryReservationRepo,
    InMemoryScheduleExceptionRepo,
)


def _request(**overrides) -> ReservationScheduleRequest:
    fields = {
        'reservation_id': new_uuid7(),
        'user_id': DINER_ID,
        'restaurant_id': RESTAURANT_ID,
        'table_id': TABLE_ID,
        'reservation_date': MONDAY,
        'reservation_time': time(19, 0),
        'number_of_guests': 2,
    }
    fields.update(overrides)
    return ReservationScheduleRequest(**fields)


@pytest.mark.unit
class TestScheduleReservation:
    @pytest.mark.asyncio
    async def test_monday_evening_scenario(
        self, domain_service: ReservationDomainService
    ) -> None:
        """
        Given: Restaurant open Mon-Sat 09:00-22:00, 90 minute slots
        When: 19:00 is booked, then 19:30 and 20:30 are requested on the same table
        Then: 19:00 is PENDING, 19:30 conflicts, 20:30 is accepted back-to-back
        """
        first = await domain_service.schedule_reservation(_request(number_of_guests=4))
        assert first.status == ReservationStatus.PENDING

        with pytest.raises(TableConflictError) as exc_info:
            await domain_service.schedule_reservation(_request(reservation_time=time(19, 30)))
        assert exc_info.value.conflicting_reservation_id == str(first.id)
        assert exc_info.value.status_code == 409

        third = await domain_service.schedule_reservation(_request(reservation_time=time(20, 30)))
        assert third.status == ReservationStatus.PENDING

    @pytest.mark.asyncio
    async def test_other_table_same_slot_is_free(
        self, domain_service: ReservationDomainService
    ) -> None:
        await domain_service.schedule_reservation(_request())

        other = await domain_service.schedule_reservation(
            _request(user_id=ANOTHER_DINER_ID, table_id=OTHER_TABLE_ID)
        )

        assert other.table_id == OTHER_TABLE_ID

    @pytest.mark.asyncio
    async def test_diner_cannot_hold_two_tables_at_overlapping_times(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        """
        Given: The diner holds table-1 on Monday 19:00-20:30
        When: The same diner requests table-2 at 19:30, then at 20:30
        Then: 19:30 is rejected as a diner conflict, 20:30 is accepted
        """
        first = await domain_service.schedule_reservation(_request())
        saves_before = reservation_repo.save_calls

        with pytest.raises(UserTimeConflictError) as exc_info:
            await domain_service.schedule_reservation(
                _request(table_id=OTHER_TABLE_ID, reservation_time=time(19, 30))
            )
        assert exc_info.value.status_code == 409
        assert exc_info.value.context['conflicting_reservation_id'] == str(first.id)
        assert reservation_repo.save_calls == saves_before

        later = await domain_service.schedule_reservation(
            _request(table_id=OTHER_TABLE_ID, reservation_time=time(20, 30))
        )
        assert later.user_id == DINER_ID

    @pytest.mark.asyncio
    async def test_cancelled_reservation_frees_its_slot(
        self, domain_service: ReservationDomainService
    ) -> None:
        first = await domain_service.schedule_reservation(_request())
        await domain_service.cancel_reservation(
            ReservationCancellationRequest(reservation_id=first.id, user_id=DINER_ID)
        )

        again = await domain_service.schedule_reservation(_request(user_id=ANOTHER_DINER_ID))

        assert again.window == first.window

    @pytest.mark.asyncio
    async def test_closed_weekday_is_rejected(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(OutsideOperatingHoursError, match='closed on Sunday'):
            await domain_service.schedule_reservation(_request(reservation_date=SUNDAY))

    @pytest.mark.parametrize('start', [time(8, 30), time(21, 0), time(22, 0)])
    @pytest.mark.asyncio
    async def test_slot_outside_operating_hours_is_rejected(
        self, domain_service: ReservationDomainService, start: time
    ) -> None:
        with pytest.raises(OutsideOperatingHoursError):
            await domain_service.schedule_reservation(_request(reservation_time=start))

    @pytest.mark.asyncio
    async def test_slot_ending_at_closing_time_is_accepted(
        self, domain_service: ReservationDomainService
    ) -> None:
        reservation = await domain_service.schedule_reservation(
            _request(reservation_time=time(20, 30))
        )

        assert reservation.window.end_at == datetime.combine(MONDAY, time(22, 0))

    @pytest.mark.asyncio
    async def test_blackout_day_is_rejected(
        self,
        domain_service: ReservationDomainService,
        schedule_exception_repo: InMemoryScheduleExceptionRepo,
    ) -> None:
        await schedule_exception_repo.create(
            schedule_exception=ScheduleException.create(
                id=new_uuid7(),
                restaurant_id=RESTAURANT_ID,
                start_date=MONDAY,
                end_date=MONDAY + timedelta(days=2),
                reason='Private event',
            )
        )

        with pytest.raises(RestaurantClosedByExceptionError) as exc_info:
            await domain_service.schedule_reservation(_request())

        assert exc_info.value.status_code == 409
        assert exc_info.value.context['reason'] == 'Private event'

    @pytest.mark.asyncio
    async def test_capacity_is_enforced(self, domain_service: ReservationDomainService) -> None:
        with pytest.raises(TableCapacityExceededError):
            await domain_service.schedule_reservation(_request(number_of_guests=5))

    @pytest.mark.asyncio
    async def test_zero_guests_is_rejected_before_any_lookup(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(ValidationError):
            await domain_service.schedule_reservation(
                _request(user_id='nobody', number_of_guests=0)
            )

    @pytest.mark.asyncio
    async def test_zero_duration_is_rejected_before_any_write(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        with pytest.raises(ValidationError, match='duration_minutes'):
            await domain_service.schedule_reservation(_request(duration_minutes=0))

        assert reservation_repo.save_calls == 0

    @pytest.mark.asyncio
    async def test_unknown_user_is_rejected(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(UserNotFoundError):
            await domain_service.schedule_reservation(_request(user_id='ghost'))

    @pytest.mark.asyncio
    async def test_unknown_table_is_rejected(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(TableNotFoundError):
            await domain_service.schedule_reservation(_request(table_id='table-404'))

    @pytest.mark.asyncio
    async def test_table_of_another_restaurant_is_rejected(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(TableRestaurantMismatchError):
            await domain_service.schedule_reservation(_request(table_id=FOREIGN_TABLE_ID))

    @pytest.mark.asyncio
    async def test_inactive_restaurant_is_not_bookable(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(RestaurantNotBookableError):
            await domain_service.schedule_reservation(
                _request(restaurant_id=CLOSED_RESTAURANT_ID, table_id='table-inactive')
            )

    @pytest.mark.asyncio
    async def test_past_slot_is_rejected(
        self, domain_service: ReservationDomainService, now: datetime
    ) -> None:
        with pytest.raises(ValidationError, match='future'):
            await domain_service.schedule_reservation(
                _request(reservation_date=now.date(), reservation_time=time(10, 0))
            )

    @pytest.mark.asyncio
    async def test_slot_beyond_booking_horizon_is_rejected(
        self, domain_service: ReservationDomainService
    ) -> None:
        # 2025-06-02 is a Monday, one day past NOW + 3 months
        with pytest.raises(MaxAdvanceWindowError):
            await domain_service.schedule_reservation(_request(reservation_date=date(2025, 6, 2)))

    @pytest.mark.asyncio
    async def test_storage_conflict_is_reported_as_table_conflict(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        """
        Given: The conflict lookup sees nothing (a concurrent write is not yet visible)
        When: The write is rejected by the store
        Then: TableConflictError carrying the store's conflicting id
        """
        reservation_repo.find_active_on_table = AsyncMock(return_value=[])
        reservation_repo.save = AsyncMock(
            side_effect=ConflictError(
                'overlap', context={'conflicting_reservation_id': 'other-reservation'}
            )
        )

        with pytest.raises(TableConflictError) as exc_info:
            await domain_service.schedule_reservation(_request())

        assert exc_info.value.conflicting_reservation_id == 'other-reservation'

    @pytest.mark.asyncio
    async def test_no_write_is_issued_for_an_invalid_request(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        with pytest.raises(OutsideOperatingHoursError):
            await domain_service.schedule_reservation(_request(reservation_date=SUNDAY))

        assert reservation_repo.save_calls == 0

    @pytest.mark.asyncio
    async def test_random_requests_never_double_book(
        self, domain_service: ReservationDomainService, user_existence: FakeUserExistence
    ) -> None:
        """Accepted windows on one table/date never overlap, rejected ones always did"""
        rng = random.Random(20250310)
        accepted = []

        for i in range(200):
            user_id = f'diner-{i}'
            user_existence.user_ids.add(user_id)
            start = time(rng.randrange(9, 21), rng.choice([0, 15, 30, 45]))
            duration = rng.choice([30, 45, 60, 90])
            day = MONDAY + timedelta(days=7 * rng.randrange(0, 2))
            table_id = rng.choice([TABLE_ID, OTHER_TABLE_ID])
            request = _request(
                user_id=user_id,
                reservation_date=day,
                reservation_time=start,
                duration_minutes=duration,
                table_id=table_id,
                number_of_guests=1,
            )
            try:
                accepted.append(await domain_service.schedule_reservation(request))
            except TableConflictError:
                requested = datetime.combine(day, start)
                requested_end = requested + timedelta(minutes=duration)
                assert any(
                    r.table_id == table_id
                    and r.window.start_at < requested_end
                    and requested < r.window.end_at
                    for r in accepted
                )
            except OutsideOperatingHoursError:
                pass

        for i, a in enumerate(accepted):
            for b in accepted[i + 1 :]:
                if a.table_id == b.table_id and a.reservation_date == b.reservation_date:
                    assert not a.window.overlaps(b.window)


@pytest.mark.unit
class TestUpdateReservation:
    @pytest.mark.asyncio
    async def test_moving_within_own_window_does_not_conflict_with_itself(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        moved = await domain_service.update_reservation(
            ReservationUpdateRequest(
                reservation_id=original.id, user_id=DINER_ID, reservation_time=time(19, 30)
            )
        )

        assert moved.id == original.id
        assert moved.reservation_time == time(19, 30)

    @pytest.mark.asyncio
    async def test_moving_onto_another_reservation_conflicts(
        self, domain_service: ReservationDomainService
    ) -> None:
        blocker = await domain_service.schedule_reservation(
            _request(user_id=ANOTHER_DINER_ID, reservation_time=time(12, 0))
        )
        mine = await domain_service.schedule_reservation(_request())

        with pytest.raises(TableConflictError) as exc_info:
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=mine.id, user_id=DINER_ID, reservation_time=time(12, 30)
                )
            )

        assert exc_info.value.conflicting_reservation_id == str(blocker.id)

    @pytest.mark.asyncio
    async def test_moving_onto_own_reservation_at_another_table_conflicts(
        self, domain_service: ReservationDomainService
    ) -> None:
        dinner = await domain_service.schedule_reservation(_request())
        lunch = await domain_service.schedule_reservation(
            _request(table_id=OTHER_TABLE_ID, reservation_time=time(12, 0))
        )

        with pytest.raises(UserTimeConflictError) as exc_info:
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=lunch.id, user_id=DINER_ID, reservation_time=time(19, 0)
                )
            )

        assert exc_info.value.context['conflicting_reservation_id'] == str(dinner.id)

    @pytest.mark.asyncio
    async def test_guest_change_is_checked_against_capacity(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        with pytest.raises(TableCapacityExceededError):
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=original.id, user_id=DINER_ID, number_of_guests=9
                )
            )

    @pytest.mark.asyncio
    async def test_other_diner_cannot_update(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        with pytest.raises(ReservationOwnershipError):
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=original.id, user_id=ANOTHER_DINER_ID, number_of_guests=3
                )
            )

    @pytest.mark.asyncio
    async def test_owner_acting_on_behalf_skips_diner_check(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        updated = await domain_service.update_reservation(
            ReservationUpdateRequest(
                reservation_id=original.id,
                user_id='owner-1',
                number_of_guests=3,
                acting_as_owner=True,
            )
        )

        assert updated.number_of_guests == 3
        assert updated.user_id == DINER_ID

    @pytest.mark.asyncio
    async def test_cancelled_reservation_cannot_be_rescheduled(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())
        await domain_service.cancel_reservation(
            ReservationCancellationRequest(reservation_id=original.id, user_id=DINER_ID)
        )

        with pytest.raises(InvalidStateTransitionError):
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=original.id, user_id=DINER_ID, reservation_time=time(13, 0)
                )
            )

    @pytest.mark.asyncio
    async def test_unknown_reservation_is_not_found(
        self, domain_service: ReservationDomainService
    ) -> None:
        with pytest.raises(ReservationNotFoundError):
            await domain_service.update_reservation(
                ReservationUpdateRequest(
                    reservation_id=UUID('00000000-0000-0000-0000-000000000404'),
                    user_id=DINER_ID,
                    number_of_guests=2,
                )
            )


@pytest.mark.unit
class TestReservationStatusChanges:
    @pytest.mark.asyncio
    async def test_cancel_is_idempotent(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        original = await domain_service.schedule_reservation(_request())
        request = ReservationCancellationRequest(reservation_id=original.id, user_id=DINER_ID)

        first = await domain_service.cancel_reservation(request)
        saves_after_first = reservation_repo.save_calls
        second = await domain_service.cancel_reservation(request)

        assert first.status == second.status == ReservationStatus.CANCELLED
        assert reservation_repo.save_calls == saves_after_first

    @pytest.mark.asyncio
    async def test_other_diner_cannot_cancel(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        with pytest.raises(ReservationOwnershipError):
            await domain_service.cancel_reservation(
                ReservationCancellationRequest(
                    reservation_id=original.id, user_id=ANOTHER_DINER_ID
                )
            )

    @pytest.mark.asyncio
    async def test_confirm_then_cancel(self, domain_service: ReservationDomainService) -> None:
        original = await domain_service.schedule_reservation(_request())

        confirmed = await domain_service.change_reservation_status(
            ReservationStatusChangeRequest(
                reservation_id=original.id, status=ReservationStatus.CONFIRMED
            )
        )
        cancelled = await domain_service.change_reservation_status(
            ReservationStatusChangeRequest(
                reservation_id=original.id, status=ReservationStatus.CANCELLED
            )
        )

        assert confirmed.status == ReservationStatus.CONFIRMED
        assert cancelled.status == ReservationStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_cancelled_cannot_be_confirmed(
        self, domain_service: ReservationDomainService
    ) -> None:
        original = await domain_service.schedule_reservation(_request())
        await domain_service.change_reservation_status(
            ReservationStatusChangeRequest(
                reservation_id=original.id, status=ReservationStatus.CANCELLED
            )
        )

        with pytest.raises(InvalidStateTransitionError):
            await domain_service.change_reservation_status(
                ReservationStatusChangeRequest(
                    reservation_id=original.id, status=ReservationStatus.CONFIRMED
                )
            )

    @pytest.mark.asyncio
    async def test_delete_removes_the_reservation(
        self, domain_service: ReservationDomainService, reservation_repo: InMemoryReservationRepo
    ) -> None:
        original = await domain_service.schedule_reservation(_request())

        deleted = await domain_service.delete_reservation(reservation_id=original.id)

        assert deleted.id == original.id
        assert await reservation_repo.get_by_id(reservation_id=original.id) is None
        with pytest.raises(ReservationNotFoundError):
            await domain_service.delete_reservation(reservation_id=original.id)
