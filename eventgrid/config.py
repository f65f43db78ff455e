"""
Configuration parser for eventgrid.

Handles TOML file parsing. Every setting has a default, so an empty file
(or no file at all, via Config.load_or_default) is a valid configuration.

Example:

    [General]
    timezone = "Europe/Amsterdam"

    [Schedule]
    horizon_days = 365
    max_visible_per_cell = 3

    [Storage]
    path = "~/.local/share/eventgrid/storage.json"
    key = "calendarEvents"
"""

import os
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .storage import get_default_storage_path


@dataclass
class StorageConfig:
    """Where the event list is persisted."""
    path: Path = field(default_factory=get_default_storage_path)
    key: str = "calendarEvents"


@dataclass
class ScheduleConfig:
    """Expansion and display settings."""
    horizon_days: Optional[int] = None  # None: one calendar year from today
    max_visible_per_cell: int = 3


@dataclass
class Config:
    """Main configuration container for eventgrid."""

    timezone: Optional[str] = None  # None: system timezone
    storage: StorageConfig = field(default_factory=StorageConfig)
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'eventgrid' / 'eventgrid.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        print(f"DEBUG: TOML data keys: {list(data.keys())}", file=sys.stderr)

        general = data.get('General', {})

        storage_data = data.get('Storage', {})
        storage = StorageConfig()
        if 'path' in storage_data:
            storage.path = Path(os.path.expanduser(storage_data['path']))
        storage.key = storage_data.get('key', storage.key)

        schedule_data = data.get('Schedule', {})
        horizon_days = schedule_data.get('horizon_days')
        if horizon_days is not None and (not isinstance(horizon_days, int) or horizon_days < 0):
            raise ValueError(f"Schedule.horizon_days must be a non-negative integer, got {horizon_days!r}")
        max_visible = schedule_data.get('max_visible_per_cell', ScheduleConfig.max_visible_per_cell)
        if not isinstance(max_visible, int) or isinstance(max_visible, bool) or max_visible < 1:
            raise ValueError(f"Schedule.max_visible_per_cell must be a positive integer, got {max_visible!r}")
        schedule = ScheduleConfig(
            horizon_days=horizon_days,
            max_visible_per_cell=max_visible,
        )

        return cls(
            timezone=general.get('timezone'),
            storage=storage,
            schedule=schedule,
        )

    @classmethod
    def load_or_default(cls, config_path: Optional[Path] = None) -> 'Config':
        """Like load(), but a missing file yields the default configuration."""
        try:
            return cls.load(config_path)
        except FileNotFoundError:
            return cls()
