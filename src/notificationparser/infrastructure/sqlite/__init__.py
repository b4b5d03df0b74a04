"""
SQLite infrastructure package.

Provides SQLite storage for notification settings.
"""

from notificationparser.infrastructure.sqlite.store import SettingsStore
from notificationparser.infrastructure.sqlite.schema import (
    COLUMNS,
    TABLE_NAME,
)

__all__ = [
    "COLUMNS",
    "SettingsStore",
    "TABLE_NAME",
]
