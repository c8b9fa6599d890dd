"""Fixtures for CLI tests.

Commands read and write the data file configured through ``mock_env``, so
tests seed state through a TrackerService on the same file.
"""

import pytest
from click.testing import CliRunner

from contractor_tracker.config.logging_config import reset_logging
from contractor_tracker.services.key_value_store import JsonFileStore
from contractor_tracker.services.tracker_service import TrackerService


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def data_service(mock_env):
    """Service over the data file the CLI will use."""
    service = TrackerService(JsonFileStore(mock_env["DATA_FILE"]))
    service.load()
    return service


@pytest.fixture
def seeded(data_service):
    """Data file holding the two example entries; returns the entries."""
    return [
        data_service.add_entry(
            {
                "date": "2025-06-01",
                "project_name": "Acme",
                "standard_hours": "8",
                "mileage": "20",
            }
        ),
        data_service.add_entry(
            {
                "date": "2025-06-02",
                "project_name": "Globex",
                "overtime_hours": "2",
                "mileage": "10",
            }
        ),
    ]


@pytest.fixture
def reload_data(mock_env):
    """Callable returning the state currently stored in the data file."""

    def _reload():
        service = TrackerService(JsonFileStore(mock_env["DATA_FILE"]))
        return service.load()

    return _reload


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging set up by --debug runs."""
    yield
    reset_logging()
