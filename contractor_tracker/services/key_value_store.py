"""
Key-value stores holding the tracker's persisted state.

Every value is an independently serialized JSON text, so one corrupted key
never prevents the others from loading. Two implementations are provided:
- InMemoryStore: process-local dictionary (tests, ephemeral sessions)
- JsonFileStore: single JSON file on disk with atomic writes
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Union

from contractor_tracker.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Interface of the persisted key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text for ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store text under ``key``.

        Raises:
            StorageError: If the value cannot be persisted
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    def keys(self) -> List[str]:
        """All stored keys."""


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store; nothing survives the process.

    Example:
        >>> store = InMemoryStore()
        >>> store.set("theme", '"dark"')
        >>> store.get("theme")
        '"dark"'
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._values)


class JsonFileStore(KeyValueStore):
    """
    Store persisted as one JSON file.

    File layout::

        {"version": "1.0", "last_updated": "...", "values": {key: text}}

    The file is read once, lazily. A missing file is an empty store; an
    unreadable or corrupted file is logged and treated as empty, and is
    moved aside to ``<name>.corrupt`` the first time the store is written.
    Writes go to a temporary file that is renamed over the target.

    Example:
        >>> store = JsonFileStore("~/.contractor_tracker/data.json")
        >>> store.set("theme", '"light"')
    """

    STORE_VERSION = "1.0"

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: Location of the JSON file (``~`` is expanded)
        """
        self.path = Path(path).expanduser()
        self._values: Optional[Dict[str, str]] = None
        self._corrupted = False

    def _load(self) -> Dict[str, str]:
        if self._values is not None:
            return self._values

        self._values = {}

        if not self.path.exists():
            logger.debug(f"Store file not found, starting empty: {self.path}")
            return self._values

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Store file is corrupted, ignoring it: {self.path}: {e}")
            self._corrupted = True
            return self._values
        except OSError as e:
            logger.warning(f"Cannot read store file {self.path}: {e}")
            return self._values

        version = data.get("version") if isinstance(data, dict) else None
        if version != self.STORE_VERSION:
            logger.warning(
                f"Store version mismatch (expected {self.STORE_VERSION}, "
                f"got {version}), ignoring store file"
            )
            self._corrupted = True
            return self._values

        values = data.get("values", {})
        if not isinstance(values, dict):
            logger.warning(f"Store file has no value table, ignoring it: {self.path}")
            self._corrupted = True
            return self._values

        for key, value in values.items():
            if isinstance(value, str):
                self._values[key] = value
            else:
                logger.warning(f"Ignoring non-text value for key '{key}'")

        logger.debug(f"Loaded {len(self._values)} keys from {self.path}")
        return self._values

    def _write(self) -> None:
        values = self._load()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            if self._corrupted and self.path.exists():
                backup = self.path.with_name(self.path.name + ".corrupt")
                os.replace(self.path, backup)
                logger.warning(f"Moved corrupted store file to {backup}")
            self._corrupted = False

            payload = {
                "version": self.STORE_VERSION,
                "last_updated": datetime.now().isoformat(),
                "values": values,
            }

            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, suffix=".tmp"
            )
            try:
                with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, indent=2)
                os.replace(temp_path, self.path)
            except Exception:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
                raise

        except OSError as e:
            raise StorageError(
                f"Failed to write {self.path}: {e}",
                recovery_hint="Check free disk space and permissions on the data file",
            ) from e

        logger.debug(f"Saved {len(values)} keys to {self.path}")

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        self._load()[key] = value
        self._write()

    def delete(self, key: str) -> None:
        values = self._load()
        if key in values:
            del values[key]
            self._write()

    def keys(self) -> List[str]:
        return list(self._load())
