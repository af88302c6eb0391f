"""
Test Configuration and Fixtures

- Environment is pinned before any application module reads settings
- Table holds run on the in-memory backend so unit and API tests need no Kvrocks
- Shared restaurant/table fixtures live in test/service/restaurant_booking/conftest.py
"""

# =============================================================================
# Environment setup MUST happen before any other imports
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports settings."""
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'restaurant_booking_test_db'
        os.environ['KVROCKS_KEY_PREFIX'] = 'test_'
    else:
        os.environ['POSTGRES_DB'] = f'restaurant_booking_test_db_{worker_id}'
        os.environ['KVROCKS_KEY_PREFIX'] = f'test_{worker_id}_'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['TABLE_HOLD_BACKEND'] = 'memory'
    os.environ.setdefault('SECRET_KEY', 'test_secret_key')
    os.environ.setdefault('RESERVATION_SLOT_DURATION_MINUTES', '90')
    os.environ.setdefault('RESERVATION_MAX_ADVANCE_MONTHS', '3')


_early_setup_test_environment()

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402

from test.constants import NOW  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line('markers', 'unit: pure unit tests, no external services')
    config.addinivalue_line('markers', 'api: HTTP tests against the app with in-memory adapters')


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def fixed_clock(now: datetime):
    return lambda: now
