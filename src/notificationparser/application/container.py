"""
Dependency injection container for the plugin.

Builds the store, extractor, package info provider and lifecycle from a
ParserConfig, creating each one on first use.
"""

import logging
from typing import Optional

from ..domain.config import ParserConfig
from ..infrastructure.manifest.extractor import ManifestExtractor
from ..infrastructure.pkginfo.provider import ManifestPackageInfo, PackageInfoProvider
from ..infrastructure.sqlite.store import SettingsStore
from .lifecycle import LifecycleSync

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    Manages the creation of the plugin's services and infrastructure components.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        package_info: Optional[PackageInfoProvider] = None,
    ):
        """
        Initialize the container.

        Args:
            config: Plugin configuration (defaults when omitted)
            package_info: Override for app id enumeration (manifest directory by default)
        """
        self.config = config or ParserConfig()
        self._package_info = package_info
        self._store: Optional[SettingsStore] = None
        self._extractor: Optional[ManifestExtractor] = None
        self._lifecycle: Optional[LifecycleSync] = None

    @property
    def store(self) -> SettingsStore:
        """Get the settings store."""
        if self._store is None:
            self._store = SettingsStore(self.config.db_path)
        return self._store

    @property
    def extractor(self) -> ManifestExtractor:
        """Get the manifest extractor."""
        if self._extractor is None:
            self._extractor = ManifestExtractor()
        return self._extractor

    @property
    def package_info(self) -> PackageInfoProvider:
        """Get the package info provider."""
        if self._package_info is None:
            self._package_info = ManifestPackageInfo(self.config.manifest_dir)
        return self._package_info

    @property
    def lifecycle(self) -> LifecycleSync:
        """Get the lifecycle synchronizer."""
        if self._lifecycle is None:
            self._lifecycle = LifecycleSync(
                self.store,
                extractor=self.extractor,
                package_info=self.package_info,
            )
            logger.debug("Lifecycle ready (db=%s)", self.config.db_path)
        return self._lifecycle
