"""Services for persisted tracker state."""

from contractor_tracker.services.key_value_store import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
)
from contractor_tracker.services.tracker_service import (
    Theme,
    TrackerService,
    TrackerState,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "Theme",
    "TrackerService",
    "TrackerState",
]
