"""
Package lifecycle synchronization.

Keeps the notification settings table in step with package install,
upgrade and uninstall:

- install / upgrade: extract the manifest's settings and upsert them
- pre-upgrade: drop every row of the package, so app ids removed by the
  new version do not linger
- uninstall: delete the row of every app id the package owns, best effort

Each operation opens the store on entry and closes it on exit.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from notificationparser.domain.errors import NotificationParserError, StoreIOError
from notificationparser.domain.models import SettingsRecord
from notificationparser.infrastructure.manifest.extractor import ManifestDocument, ManifestExtractor
from notificationparser.infrastructure.pkginfo.provider import PackageInfoProvider
from notificationparser.infrastructure.sqlite.store import SettingsStore

logger = logging.getLogger(__name__)


class Lifecycle(ABC):
    """
    Hooks invoked by the package manager, one per lifecycle phase.

    Implementations raise NotificationParserError subclasses on failure;
    translating them to host status codes is the adapter's job.
    """

    @abstractmethod
    def pre_install(self, package_id: str) -> None: ...

    @abstractmethod
    def install(self, document: ManifestDocument, package_id: str) -> None: ...

    @abstractmethod
    def post_install(self, package_id: str) -> None: ...

    @abstractmethod
    def pre_upgrade(self, package_id: str) -> None: ...

    @abstractmethod
    def upgrade(self, document: ManifestDocument, package_id: str) -> None: ...

    @abstractmethod
    def post_upgrade(self, package_id: str) -> None: ...

    @abstractmethod
    def pre_uninstall(self, package_id: str) -> None: ...

    @abstractmethod
    def uninstall(self, document: Optional[ManifestDocument], package_id: str) -> None: ...

    @abstractmethod
    def post_uninstall(self, package_id: str) -> None: ...


class LifecycleSync(Lifecycle):
    """
    Synchronizes manifest notification settings into the settings store.

    Usage:
        sync = LifecycleSync(SettingsStore(db_path), package_info=ManifestPackageInfo(manifest_dir))
        sync.pre_upgrade("org.example.pkg")
        sync.upgrade(tree, "org.example.pkg")
    """

    def __init__(
        self,
        store: SettingsStore,
        extractor: Optional[ManifestExtractor] = None,
        package_info: Optional[PackageInfoProvider] = None,
    ) -> None:
        self.store = store
        self.extractor = extractor or ManifestExtractor()
        self.package_info = package_info

    # ========================================================================
    # Synchronization
    # ========================================================================

    def on_install(self, document: ManifestDocument, package_id: str) -> SettingsRecord:
        """
        Store the settings declared by a package manifest.

        Extraction happens before anything is written, so a bad manifest
        leaves the store untouched.

        Returns:
            The record that was stored
        """
        with self.store.session():
            record = self.extractor.extract(document, package_id)
            self.store.upsert(record)
        logger.debug("Stored notification setting for %s (%s)", record.app_id, package_id)
        return record

    on_upgrade = on_install

    def on_pre_upgrade(self, package_id: str) -> int:
        """
        Remove every settings row of a package ahead of its upgrade.

        Returns:
            Number of rows removed
        """
        with self.store.session():
            count = self.store.count_by_package(package_id)
            logger.debug("%d app(s) registered for %s", count, package_id)
            if count == 0:
                return 0
            removed = self.store.delete_by_package(package_id)
        logger.debug("Removed %d notification setting(s) of %s", removed, package_id)
        return removed

    def on_uninstall(self, package_id: str, app_ids: Iterable[str]) -> int:
        """
        Delete the settings of each application of an uninstalled package.

        A failed delete is logged and the loop moves on; an error raised
        while enumerating app ids ends the loop without failing the call.

        Returns:
            Number of app ids whose delete succeeded
        """
        succeeded = 0
        with self.store.session():
            apps = iter(app_ids)
            while True:
                try:
                    app_id = next(apps)
                except StopIteration:
                    break
                except Exception as exc:  # pylint: disable=broad-except
                    logger.error("App enumeration for %s failed: %s", package_id, exc)
                    break

                try:
                    self.store.delete_by_app_id(app_id)
                except StoreIOError as exc:
                    logger.error("Failed to delete notification setting of %s: %s", app_id, exc)
                    continue
                succeeded += 1

        logger.debug("Deleted notification settings of %d app(s) of %s", succeeded, package_id)
        return succeeded

    # ========================================================================
    # Host hooks
    # ========================================================================

    def pre_install(self, package_id: str) -> None:
        logger.debug("PRE_INSTALL(package_id: %s)", package_id)

    def install(self, document: ManifestDocument, package_id: str) -> None:
        logger.debug("INSTALL(package_id: %s)", package_id)
        self.on_install(document, package_id)

    def post_install(self, package_id: str) -> None:
        logger.debug("POST_INSTALL(package_id: %s)", package_id)

    def pre_upgrade(self, package_id: str) -> None:
        logger.debug("PRE_UPGRADE(package_id: %s)", package_id)
        self.on_pre_upgrade(package_id)

    def upgrade(self, document: ManifestDocument, package_id: str) -> None:
        logger.debug("UPGRADE(package_id: %s)", package_id)
        self.on_upgrade(document, package_id)

    def post_upgrade(self, package_id: str) -> None:
        logger.debug("POST_UPGRADE(package_id: %s)", package_id)

    def pre_uninstall(self, package_id: str) -> None:
        logger.debug("PRE_UNINSTALL(package_id: %s)", package_id)

    def uninstall(self, document: Optional[ManifestDocument], package_id: str) -> None:
        """Delete settings of every app of the package; the manifest is not consulted."""
        logger.debug("UNINSTALL(package_id: %s)", package_id)
        if self.package_info is None:
            raise NotificationParserError("No package info provider configured for uninstall")
        # Lookup failure (unknown package) fails the hook before the store is opened
        app_ids = self.package_info.app_ids(package_id)
        self.on_uninstall(package_id, app_ids)

    def post_uninstall(self, package_id: str) -> None:
        logger.debug("POST_UNINSTALL(package_id: %s)", package_id)
