"""
Key-value persistence backends for eventgrid.

The engine needs only read(key) and write(key, value). The EventStore
keeps its whole event list as one string under one key, so any backend
that can store strings will do.
"""

import json
import os
import sys
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] STORAGE: {msg}", file=sys.stderr)


class KeyValueStore(ABC):
    """
    Abstract base class for persistence backends.

    Implementations must make write() all-or-nothing: after it returns the
    new value is stored, after it raises the old value is still there.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed store for tests and embedding."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes += 1


class JsonFileKeyValueStore(KeyValueStore):
    """
    JSON file-based store.

    The whole file is one JSON object mapping keys to strings. Writes go
    to a temporary file in the same directory which then replaces the
    original, so readers never see a half-written file.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        _debug_print(f"Initialized JSON storage at {self.path}")

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            _debug_print(f"Error reading {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            _debug_print(f"Ignoring {self.path}: top level is not an object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def read(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value

        fd, tmp_name = tempfile.mkstemp(prefix=".eventgrid-", dir=self.path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        _debug_print(f"Saved {len(value.encode('utf-8'))} bytes under {key!r}")


def get_default_storage_path() -> Path:
    """Get the default storage file respecting XDG."""
    xdg_data = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(xdg_data) / 'eventgrid' / 'storage.json'


def create_key_value_store(path: Optional[Path] = None) -> KeyValueStore:
    """Factory function to create a file-backed store."""
    if path is None:
        path = get_default_storage_path()
    return JsonFileKeyValueStore(path)
