"""notificationparser exception hierarchy.

Every exception carries the negative errno status the host expects back
from a hook.
"""

from __future__ import annotations

import errno


class NotificationParserError(Exception):
    """Base exception for all notificationparser errors."""

    status: int = -errno.EIO


class InvalidArgumentError(NotificationParserError):
    """Raised when a manifest or identifier handed over by the host is unusable."""

    status = -errno.EINVAL


class ManifestFormatError(InvalidArgumentError):
    """Raised when the manifest document lacks the expected structure."""


class PackageNotFoundError(InvalidArgumentError):
    """Raised when the host has no package information for a package id."""


class StoreIOError(NotificationParserError):
    """Raised when the settings database cannot be opened, read or written."""

    status = -errno.EIO


class InvalidStateError(StoreIOError):
    """Raised when the settings database path exists but is not a regular file."""


class ConfigError(NotificationParserError):
    """Raised when the configuration is invalid or cannot be read."""

    status = -errno.EINVAL


def status_for(exc: BaseException) -> int:
    """Map an exception raised by a hook to the host's negative status code."""
    if isinstance(exc, NotificationParserError):
        return exc.status
    if isinstance(exc, MemoryError):
        return -errno.ENOMEM
    return -errno.EIO
