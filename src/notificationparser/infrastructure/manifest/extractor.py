"""
Manifest extractor - reads notification settings out of a package manifest.

Expected shape (the root element name is not checked):

    <notifications>
        <setting appid="org.example.app">
            <notification section="sounds">off</notification>
            <notification section="badge">off</notification>
        </setting>
    </notifications>

The first element under the root names the application; its `notification`
children carry one setting each, selected by their `section` attribute.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Union

from notificationparser.domain.errors import InvalidArgumentError, ManifestFormatError
from notificationparser.domain.models import Section, SettingsRecord

logger = logging.getLogger(__name__)

ManifestDocument = Union[ET.ElementTree, ET.Element]

SETTING_TAG = "notification"
APPID_ATTR = "appid"
SECTION_ATTR = "section"


def local_name(tag: object) -> Optional[str]:
    """Strip the `{namespace}` prefix ElementTree puts on qualified tags."""
    if not isinstance(tag, str):
        # Comments and processing instructions
        return None
    return tag.rsplit("}", 1)[-1]


def load_manifest(source: Union[str, bytes, Path]) -> ET.ElementTree:
    """
    Parse a manifest from a file path or XML text.

    Args:
        source: Path to a manifest file, or the XML document itself

    Returns:
        Parsed element tree

    Raises:
        ManifestFormatError: The document is not well-formed XML or cannot be read
    """
    try:
        if isinstance(source, Path):
            return ET.parse(source)
        if isinstance(source, bytes) or source.lstrip().startswith("<"):
            return ET.ElementTree(ET.fromstring(source))
        return ET.parse(source)
    except ET.ParseError as exc:
        raise ManifestFormatError(f"Malformed manifest: {exc}") from exc
    except OSError as exc:
        raise ManifestFormatError(f"Cannot read manifest {source}: {exc}") from exc


class ManifestExtractor:
    """Turns a manifest document into a fully populated SettingsRecord."""

    def extract(self, document: ManifestDocument, package_id: str) -> SettingsRecord:
        """
        Extract the notification settings of the manifest's application.

        Args:
            document: Parsed manifest (tree or its root element)
            package_id: Owning package id, supplied by the host

        Returns:
            Settings record with defaults applied to every section left out

        Raises:
            ManifestFormatError: The root has no child element
            InvalidArgumentError: The app element has no appid, or package_id is empty
        """
        if not package_id:
            raise InvalidArgumentError("Package id is empty")

        app_node = self._first_element(self._root(document))
        if app_node is None:
            logger.error("Manifest root has no child element")
            raise ManifestFormatError("Manifest root has no child element")

        app_id = app_node.get(APPID_ATTR)
        if not app_id:
            logger.error("Manifest element <%s> has no %s attribute", local_name(app_node.tag), APPID_ATTR)
            raise InvalidArgumentError(f"Missing {APPID_ATTR} attribute in manifest")

        values: dict[Section, str] = {}
        for child in app_node:
            if local_name(child.tag) != SETTING_TAG:
                continue
            section = Section.from_string(child.get(SECTION_ATTR))
            if section is None:
                logger.debug("Ignoring unknown section %r for %s", child.get(SECTION_ATTR), app_id)
                continue
            values[section] = "".join(child.itertext())

        record = SettingsRecord(
            app_id=app_id,
            package_id=package_id,
            **{section.value: value for section, value in values.items()},
        )
        logger.debug(
            "Extracted %s: notification=%s sounds=%s contents=%s badge=%s",
            record.app_id,
            record.notification,
            record.sounds,
            record.contents,
            record.badge,
        )
        return record

    @staticmethod
    def _root(document: ManifestDocument) -> Optional[ET.Element]:
        if isinstance(document, ET.ElementTree):
            return document.getroot()
        return document

    @staticmethod
    def _first_element(root: Optional[ET.Element]) -> Optional[ET.Element]:
        if root is None:
            return None
        for child in root:
            if local_name(child.tag) is not None:
                return child
        return None
