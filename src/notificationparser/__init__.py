"""
notificationparser - package manager parser plugin for notification settings.

Keeps the per-application notification settings table in sync with the
notification block of package manifests across install, upgrade and uninstall.

Usage:
    # Host hooks
    from notificationparser.interface import plugin

    plugin.PKGMGR_PARSER_PLUGIN_INSTALL(manifest_doc, "org.example.pkg")

    # Programmatic
    from notificationparser.application.lifecycle import LifecycleSync
    from notificationparser.infrastructure.sqlite import SettingsStore

    sync = LifecycleSync(SettingsStore("/tmp/notification_parser.db"))
    sync.on_install(manifest_doc, "org.example.pkg")
"""

__version__ = "0.1.0"
__author__ = "notificationparser Team"

from notificationparser.application.lifecycle import Lifecycle, LifecycleSync

__all__ = ["Lifecycle", "LifecycleSync", "__version__"]
