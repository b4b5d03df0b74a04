"""
Package information providers.

Answers "which applications does this package contain?" for the uninstall
hook. The host framework owns that knowledge; these providers read it from
installed package manifests or from a mapping handed over by an embedding host.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Protocol

from notificationparser.domain.errors import PackageNotFoundError
from notificationparser.infrastructure.manifest.extractor import APPID_ATTR, local_name

logger = logging.getLogger(__name__)

APPLICATION_SUFFIX = "-application"


class PackageInfoProvider(Protocol):
    """Enumerates the application ids belonging to a package."""

    def app_ids(self, package_id: str) -> Iterable[str]:
        """
        Return every application id of the package.

        Raises:
            PackageNotFoundError: The package is not known
        """
        ...


class ManifestPackageInfo:
    """
    Reads application ids from installed package manifests.

    Looks for `<manifest_dir>/<package_id>.xml` and collects the `appid` of
    every application element (ui-application, service-application,
    widget-application, ...), in document order. Other elements carrying an
    `appid`, such as shortcuts or account providers, may name apps of other
    packages and are skipped.
    """

    def __init__(self, manifest_dir: Path | str) -> None:
        self.manifest_dir = Path(manifest_dir)

    def manifest_path(self, package_id: str) -> Path:
        return self.manifest_dir / f"{package_id}.xml"

    def app_ids(self, package_id: str) -> Iterator[str]:
        path = self.manifest_path(package_id)
        if not path.is_file():
            logger.error("No manifest for package %s at %s", package_id, path)
            raise PackageNotFoundError(f"Package not found: {package_id}")

        try:
            tree = ET.parse(path)
        except (ET.ParseError, OSError) as exc:
            logger.error("Cannot read manifest %s: %s", path, exc)
            raise PackageNotFoundError(f"Unreadable manifest for {package_id}: {exc}") from exc

        return self._collect(tree.getroot())

    @staticmethod
    def _collect(root: ET.Element) -> Iterator[str]:
        seen: set[str] = set()
        for element in root.iter():
            tag = local_name(element.tag)
            if tag is None or not tag.endswith(APPLICATION_SUFFIX):
                continue
            app_id = element.get(APPID_ATTR)
            if app_id and app_id not in seen:
                seen.add(app_id)
                yield app_id


class StaticPackageInfo:
    """In-memory package → app ids mapping."""

    def __init__(self, packages: Mapping[str, Iterable[str]]) -> None:
        self._packages = {pkg: list(apps) for pkg, apps in packages.items()}

    def app_ids(self, package_id: str) -> list[str]:
        if package_id not in self._packages:
            raise PackageNotFoundError(f"Package not found: {package_id}")
        return list(self._packages[package_id])
