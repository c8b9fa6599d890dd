"""
Global pytest configuration and fixtures.
"""
import datetime as dt
from decimal import Decimal
from typing import Dict, List

import pytest

from contractor_tracker.config import TrackerConfig, reload_config
from contractor_tracker.models import ContractorProfile, Entry, RateTable
from contractor_tracker.services import InMemoryStore, TrackerService


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG',
        'MILEAGE_RATE': '0.725',
    }


@pytest.fixture
def mock_env(test_env_vars, tmp_path, monkeypatch):
    """Mock environment variables, with the data file and exports in tmp_path."""
    env = dict(test_env_vars)
    env['DATA_FILE'] = str(tmp_path / 'data.json')
    env['EXPORT_DIR'] = str(tmp_path / 'exports')
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    # Clear the global config to force reload with test values
    import contractor_tracker.config.settings
    contractor_tracker.config.settings._config = None

    yield env

    # Clean up
    contractor_tracker.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> TrackerConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Empty in-memory key-value store."""
    return InMemoryStore()


@pytest.fixture
def tracker(memory_store) -> TrackerService:
    """Loaded tracker service over an empty in-memory store."""
    service = TrackerService(memory_store)
    service.load()
    return service


@pytest.fixture
def sample_entries() -> List[Entry]:
    """The two entries used throughout the calculation examples."""
    return [
        Entry.create(
            date='2025-06-01',
            project_name='Acme',
            standard_hours='8',
            mileage='20',
        ),
        Entry.create(
            date='2025-06-02',
            project_name='Globex',
            overtime_hours='2',
            mileage='10',
        ),
    ]


@pytest.fixture
def sample_profile() -> ContractorProfile:
    """Filled-in contractor profile."""
    return ContractorProfile(
        name='John Doe',
        business='Doe Field Services LLC',
        client='Acme Corp',
        address='1 Main St\nSpringfield',
        email='john@example.com',
        phone='555-0100',
        default_rates=RateTable(standard_rate=Decimal('50')),
    )


@pytest.fixture
def today() -> dt.date:
    """Fixed 'today' for date filter tests."""
    return dt.date(2025, 6, 15)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as a command line test"
    )
