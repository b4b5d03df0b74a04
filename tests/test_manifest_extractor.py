"""
Tests for ManifestExtractor and load_manifest.

Covers default application, section routing, last-wins, namespaced
manifests and the failure cases that must abort extraction.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from conftest import manifest
from notificationparser.domain.errors import InvalidArgumentError, ManifestFormatError
from notificationparser.infrastructure.manifest import ManifestExtractor, load_manifest

pytestmark = pytest.mark.unit


@pytest.fixture
def extractor() -> ManifestExtractor:
    return ManifestExtractor()


class TestExtract:
    def test_defaults_when_no_settings(self, extractor: ManifestExtractor):
        rec = extractor.extract(manifest("A"), "P")

        assert rec.app_id == "A"
        assert rec.package_id == "P"
        assert (rec.notification, rec.sounds, rec.contents, rec.badge) == ("on", "on", "off", "on")

    def test_section_routing(self, extractor: ManifestExtractor):
        rec = extractor.extract(manifest("A", ("badge", "off"), ("sounds", "off")), "P")

        assert rec.badge == "off"
        assert rec.sounds == "off"
        assert rec.notification == "on"
        assert rec.contents == "off"

    def test_all_sections(self, extractor: ManifestExtractor):
        rec = extractor.extract(
            manifest(
                "A",
                ("notification", "off"),
                ("sounds", "off"),
                ("contents", "on"),
                ("badge", "off"),
            ),
            "P",
        )
        assert (rec.notification, rec.sounds, rec.contents, rec.badge) == ("off", "off", "on", "off")

    def test_last_write_wins(self, extractor: ManifestExtractor):
        rec = extractor.extract(manifest("A", ("badge", "off"), ("badge", "on")), "P")
        assert rec.badge == "on"

    def test_unknown_section_ignored(self, extractor: ManifestExtractor):
        rec = extractor.extract(manifest("A", ("vibration", "off"), ("sounds", "off")), "P")
        assert rec.sounds == "off"
        assert rec.notification == "on"

    def test_child_without_section_ignored(self, extractor: ManifestExtractor):
        doc = load_manifest('<r><s appid="A"><notification>off</notification></s></r>')
        assert extractor.extract(doc, "P").notification == "on"

    def test_other_children_ignored(self, extractor: ManifestExtractor):
        doc = load_manifest('<r><s appid="A"><label section="badge">off</label></s></r>')
        assert extractor.extract(doc, "P").badge == "on"

    def test_only_first_element_used(self, extractor: ManifestExtractor):
        doc = load_manifest(
            '<r><s appid="first"/><s appid="second">'
            '<notification section="badge">off</notification></s></r>'
        )
        rec = extractor.extract(doc, "P")
        assert rec.app_id == "first"
        assert rec.badge == "on"

    def test_comment_before_first_element_skipped(self, extractor: ManifestExtractor):
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        root = ET.fromstring('<r><!-- settings --><s appid="A"/></r>', parser=parser)
        assert extractor.extract(root, "P").app_id == "A"

    def test_namespaced_manifest(self, extractor: ManifestExtractor):
        doc = load_manifest(
            '<manifest xmlns="http://tizen.org/ns/packages">'
            '<setting appid="A"><notification section="contents">on</notification></setting>'
            '</manifest>'
        )
        assert extractor.extract(doc, "P").contents == "on"

    def test_text_content_includes_descendants(self, extractor: ManifestExtractor):
        doc = load_manifest('<r><s appid="A"><notification section="badge">o<b>ff</b></notification></s></r>')
        assert extractor.extract(doc, "P").badge == "off"

    def test_accepts_root_element(self, extractor: ManifestExtractor):
        root = manifest("A", ("badge", "off")).getroot()
        assert extractor.extract(root, "P").badge == "off"


class TestExtractFailures:
    def test_missing_appid(self, extractor: ManifestExtractor):
        with pytest.raises(InvalidArgumentError):
            extractor.extract(manifest(None, ("badge", "off")), "P")

    def test_empty_appid(self, extractor: ManifestExtractor):
        with pytest.raises(InvalidArgumentError):
            extractor.extract(manifest(""), "P")

    def test_root_without_children(self, extractor: ManifestExtractor):
        with pytest.raises(ManifestFormatError):
            extractor.extract(load_manifest("<notifications/>"), "P")

    def test_no_document(self, extractor: ManifestExtractor):
        with pytest.raises(ManifestFormatError):
            extractor.extract(None, "P")

    def test_empty_package_id(self, extractor: ManifestExtractor):
        with pytest.raises(InvalidArgumentError):
            extractor.extract(manifest("A"), "")

    def test_format_error_is_invalid_argument(self):
        assert issubclass(ManifestFormatError, InvalidArgumentError)


class TestLoadManifest:
    def test_from_text(self):
        tree = load_manifest('<r><s appid="A"/></r>')
        assert tree.getroot().tag == "r"

    def test_from_bytes(self):
        tree = load_manifest(b'<?xml version="1.0" encoding="utf-8"?><r><s appid="A"/></r>')
        assert tree.getroot()[0].get("appid") == "A"

    def test_from_path(self, tmp_path: Path):
        path = tmp_path / "m.xml"
        path.write_text('<r><s appid="A"/></r>', encoding="utf-8")
        assert load_manifest(path).getroot()[0].get("appid") == "A"
        assert load_manifest(str(path)).getroot()[0].get("appid") == "A"

    def test_malformed(self):
        with pytest.raises(ManifestFormatError):
            load_manifest("<r><s></r>")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestFormatError):
            load_manifest(tmp_path / "absent.xml")
