"""
Domain layer - settings record, configuration model and error types.
"""

from notificationparser.domain.config import ParserConfig
from notificationparser.domain.errors import (
    ConfigError,
    InvalidArgumentError,
    InvalidStateError,
    ManifestFormatError,
    NotificationParserError,
    PackageNotFoundError,
    StoreIOError,
    status_for,
)
from notificationparser.domain.models import DEFAULTS, Section, SettingsRecord, Toggle

__all__ = [
    "ConfigError",
    "DEFAULTS",
    "InvalidArgumentError",
    "InvalidStateError",
    "ManifestFormatError",
    "NotificationParserError",
    "PackageNotFoundError",
    "ParserConfig",
    "Section",
    "SettingsRecord",
    "StoreIOError",
    "Toggle",
    "status_for",
]
