"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class TimerSettings:
    """Default mode durations (minutes) from `[timer]`, used until settings are saved."""
    focus_minutes: int = 25
    short_break_minutes: int = 5
    long_break_minutes: int = 15


@dataclass(frozen=True)
class StorageSettings:
    """Local persistence settings from `[storage]`."""
    enabled: bool = True
    path: str = ""


@dataclass(frozen=True)
class NotificationSettings:
    """Completion sound settings from `[notification]`."""
    enabled: bool = True
    frequency_hz: float = 880.0
    duration_seconds: float = 0.3
    volume: float = 0.4
    output_device: Optional[int] = None


@dataclass(frozen=True)
class UIServerSettings:
    """Built-in UI server settings from `[ui_server]`."""
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8765
    index_file: str = ""


@dataclass(frozen=True)
class LoggingSettings:
    """Log verbosity from `[logging]`."""
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    timer: TimerSettings
    storage: StorageSettings
    notification: NotificationSettings
    ui_server: UIServerSettings
    logging: LoggingSettings
    source_file: str
