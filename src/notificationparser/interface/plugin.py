"""
Package manager parser plugin entry points.

The host calls these functions by name at each phase of a package's
install, upgrade and uninstall. Each returns 0 on success or a negative
errno value on failure; no exception escapes to the host.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from notificationparser.application.container import Container
from notificationparser.application.lifecycle import Lifecycle
from notificationparser.domain.errors import NotificationParserError, status_for
from notificationparser.infrastructure.config_loader import load_config
from notificationparser.infrastructure.logging_config import setup_logging
from notificationparser.infrastructure.manifest.extractor import ManifestDocument, load_manifest

logger = logging.getLogger(__name__)

HostDocument = Union[ManifestDocument, str, bytes, Path, None]

_lifecycle: Optional[Lifecycle] = None


def configure(lifecycle: Optional[Lifecycle]) -> None:
    """Install the lifecycle the hooks delegate to; None rebuilds it from config on next use."""
    global _lifecycle  # pylint: disable=global-statement
    _lifecycle = lifecycle


def get_lifecycle() -> Lifecycle:
    """Get the process-wide lifecycle, building it from configuration on first use."""
    global _lifecycle  # pylint: disable=global-statement
    if _lifecycle is None:
        config = load_config()
        setup_logging(config.log_level_value, config.log_file)
        _lifecycle = Container(config).lifecycle
    return _lifecycle


def _document(document: HostDocument) -> Optional[ManifestDocument]:
    """Accept a parsed tree, or a path or XML text the host passes instead."""
    if isinstance(document, (str, bytes, Path)):
        return load_manifest(document)
    return document


def _run(hook: str, package_id: str, call: Callable[[Lifecycle], None]) -> int:
    """Run one hook against the lifecycle and convert the outcome to a status code."""
    try:
        call(get_lifecycle())
    except Exception as exc:  # pylint: disable=broad-except
        status = status_for(exc)
        if isinstance(exc, (NotificationParserError, MemoryError)):
            logger.error("%s(%s) failed: %s (%d)", hook, package_id, exc, status)
        else:
            logger.exception("%s(%s) failed unexpectedly", hook, package_id)
        return status
    return 0


# ============================================================================
# Install
# ============================================================================

def PKGMGR_PARSER_PLUGIN_PRE_INSTALL(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("PRE_INSTALL", package_id, lambda lc: lc.pre_install(package_id))


def PKGMGR_PARSER_PLUGIN_INSTALL(document: HostDocument, package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("INSTALL", package_id, lambda lc: lc.install(_document(document), package_id))


def PKGMGR_PARSER_PLUGIN_POST_INSTALL(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("POST_INSTALL", package_id, lambda lc: lc.post_install(package_id))


# ============================================================================
# Upgrade
# ============================================================================

def PKGMGR_PARSER_PLUGIN_PRE_UPGRADE(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("PRE_UPGRADE", package_id, lambda lc: lc.pre_upgrade(package_id))


def PKGMGR_PARSER_PLUGIN_UPGRADE(document: HostDocument, package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("UPGRADE", package_id, lambda lc: lc.upgrade(_document(document), package_id))


def PKGMGR_PARSER_PLUGIN_POST_UPGRADE(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("POST_UPGRADE", package_id, lambda lc: lc.post_upgrade(package_id))


# ============================================================================
# Uninstall
# ============================================================================

def PKGMGR_PARSER_PLUGIN_PRE_UNINSTALL(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("PRE_UNINSTALL", package_id, lambda lc: lc.pre_uninstall(package_id))


def PKGMGR_PARSER_PLUGIN_UNINSTALL(document: HostDocument, package_id: str) -> int:  # pylint: disable=invalid-name,unused-argument
    # The manifest is not needed to find the package's apps
    return _run("UNINSTALL", package_id, lambda lc: lc.uninstall(None, package_id))


def PKGMGR_PARSER_PLUGIN_POST_UNINSTALL(package_id: str) -> int:  # pylint: disable=invalid-name
    return _run("POST_UNINSTALL", package_id, lambda lc: lc.post_uninstall(package_id))


HOOKS: dict[str, Callable[..., int]] = {
    "PRE_INSTALL": PKGMGR_PARSER_PLUGIN_PRE_INSTALL,
    "INSTALL": PKGMGR_PARSER_PLUGIN_INSTALL,
    "POST_INSTALL": PKGMGR_PARSER_PLUGIN_POST_INSTALL,
    "PRE_UPGRADE": PKGMGR_PARSER_PLUGIN_PRE_UPGRADE,
    "UPGRADE": PKGMGR_PARSER_PLUGIN_UPGRADE,
    "POST_UPGRADE": PKGMGR_PARSER_PLUGIN_POST_UPGRADE,
    "PRE_UNINSTALL": PKGMGR_PARSER_PLUGIN_PRE_UNINSTALL,
    "UNINSTALL": PKGMGR_PARSER_PLUGIN_UNINSTALL,
    "POST_UNINSTALL": PKGMGR_PARSER_PLUGIN_POST_UNINSTALL,
}
