# Snake - Dark Mode
# High score + control bindings persistence. Reads and writes never raise.

import json
import logging
from pathlib import Path

from snakedark.config import CONTROLS_KEY, HS_KEY

logger = logging.getLogger(__name__)

DEFAULT_PATH = Path.home() / ".snake_dark.json"


class MemoryStore:
    """Dict-backed key/value store (tests, headless runs)."""

    def __init__(self, data=None):
        self.data = dict(data or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value


class JsonFileStore:
    """Key/value store kept as one JSON object on disk."""

    def __init__(self, path=DEFAULT_PATH):
        self.path = Path(path)

    def _load(self):
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key):
        return self._load().get(key)

    def set(self, key, value):
        try:
            data = self._load()
        except (OSError, ValueError):
            # Unreadable file gets replaced rather than blocking the write.
            data = {}
        data[key] = value
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class StorageService:
    """High score and control record on top of a key/value store.

    Any failure underneath turns into a default value (reads) or a dropped
    write, with a warning in the log.
    """

    def __init__(self, store=None):
        self.store = store if store is not None else JsonFileStore()

    def get_high_score(self):
        try:
            value = int(self.store.get(HS_KEY) or 0)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not read high score: %s", e)
            return 0
        return max(0, value)

    def set_high_score(self, value):
        try:
            self.store.set(HS_KEY, int(value))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not save high score: %s", e)

    def get_controls(self):
        try:
            record = self.store.get(CONTROLS_KEY)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not read controls: %s", e)
            return None
        return record if isinstance(record, dict) else None

    def set_controls(self, record):
        try:
            # Round-trip through JSON so the stored copy never aliases the caller's dict.
            self.store.set(CONTROLS_KEY, json.loads(json.dumps(record)))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not save controls: %s", e)
