"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings, settings
from src.platform.database.db_setting import Database
from src.service.restaurant_booking.app.command.table_hold_coordinator import (
    TableHoldCoordinator,
)
from src.service.restaurant_booking.domain.reservation_domain_service import (
    ReservationDomainService,
)
from src.service.restaurant_booking.domain.schedule_exception_guard import ScheduleExceptionGuard
from src.service.restaurant_booking.driven_adapter.message_queue.reservation_event_publisher_impl import (
    ReservationEventPublisherImpl,
)
from src.service.restaurant_booking.driven_adapter.provider.ownership_assertion_impl import (
    OwnershipAssertionImpl,
)
from src.service.restaurant_booking.driven_adapter.provider.restaurant_calendar_provider_impl import (
    RestaurantCalendarProviderImpl,
)
from src.service.restaurant_booking.driven_adapter.provider.table_directory_provider_impl import (
    TableDirectoryProviderImpl,
)
from src.service.restaurant_booking.driven_adapter.provider.user_existence_impl import (
    TrustedTokenUserExistence,
)
from src.service.restaurant_booking.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.restaurant_booking.driven_adapter.repo.schedule_exception_repo_impl import (
    ScheduleExceptionRepoImpl,
)
from src.service.restaurant_booking.driven_adapter.state.table_hold_store_in_memory_impl import (
    TableHoldStoreInMemoryImpl,
)
from src.service.restaurant_booking.driven_adapter.state.table_hold_store_kvrocks_impl import (
    TableHoldStoreKvrocksImpl,
)
from src.service.restaurant_booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager, one session per repository call)
    database = providers.Singleton(Database)

    # Repositories and read-side providers (stateless - use session_factory per call)
    reservation_command_repo = providers.Singleton(
        ReservationCommandRepoImpl, session_factory=database.provided.session
    )
    schedule_exception_repo = providers.Singleton(
        ScheduleExceptionRepoImpl, session_factory=database.provided.session
    )
    restaurant_calendar_provider = providers.Singleton(
        RestaurantCalendarProviderImpl, session_factory=database.provided.session
    )
    table_directory_provider = providers.Singleton(
        TableDirectoryProviderImpl, session_factory=database.provided.session
    )
    ownership_assertion = providers.Singleton(
        OwnershipAssertionImpl, session_factory=database.provided.session
    )
    user_existence = providers.Singleton(TrustedTokenUserExistence)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)

    # Table holds: Kvrocks in deployments, process-local map for single-instance runs
    table_hold_store = providers.Selector(
        lambda: settings.TABLE_HOLD_BACKEND,
        kvrocks=providers.Singleton(TableHoldStoreKvrocksImpl),
        memory=providers.Singleton(TableHoldStoreInMemoryImpl),
    )

    # Kvrocks Pub/Sub publisher for reservation events
    reservation_event_publisher = providers.Singleton(ReservationEventPublisherImpl)

    # Domain services
    reservation_domain_service = providers.Singleton(
        ReservationDomainService,
        reservation_command_repo=reservation_command_repo,
        table_directory_provider=table_directory_provider,
        restaurant_calendar_provider=restaurant_calendar_provider,
        user_existence=user_existence,
    )
    schedule_exception_guard = providers.Singleton(
        ScheduleExceptionGuard, schedule_exception_repo=schedule_exception_repo
    )
    table_hold_coordinator = providers.Singleton(
        TableHoldCoordinator, table_hold_store=table_hold_store
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
