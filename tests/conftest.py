"""
Root pytest configuration and shared fixtures.

Markers allow running subsets of tests:
    pytest -m unit           # Pure domain/parsing tests
    pytest -m component      # Store and lifecycle tests against a temp database
    pytest -m interface      # Plugin hooks and CLI
"""

import logging
import sys
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

# Ensure src is in path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from notificationparser.domain.models import SettingsRecord  # noqa: E402
from notificationparser.infrastructure.logging_config import ROOT_LOGGER  # noqa: E402
from notificationparser.infrastructure.sqlite.store import SettingsStore  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Pure domain and parsing tests")
    config.addinivalue_line("markers", "component: Store and lifecycle tests on a temp database")
    config.addinivalue_line("markers", "interface: Plugin hook and CLI tests")


def manifest(app_id: str | None = "org.example.app", *settings: tuple[str, str]) -> ET.ElementTree:
    """Build a manifest tree with one app element and (section, value) settings."""
    root = ET.Element("notifications")
    app = ET.SubElement(root, "setting")
    if app_id is not None:
        app.set("appid", app_id)
    for section, value in settings:
        child = ET.SubElement(app, "notification", section=section)
        child.text = value
    return ET.ElementTree(root)


def record(app_id: str, package_id: str, **values: str) -> SettingsRecord:
    return SettingsRecord(app_id=app_id, package_id=package_id, **values)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "dbspace" / ".notification_parser.db"


@pytest.fixture
def store(db_path: Path):
    s = SettingsStore(db_path)
    s.connect()
    yield s
    s.close()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so handlers bound to captured streams do not leak between tests."""
    package_logger = logging.getLogger(ROOT_LOGGER)
    saved = (list(package_logger.handlers), package_logger.level, package_logger.propagate)
    yield
    for handler in package_logger.handlers:
        if handler not in saved[0]:
            handler.close()
    package_logger.handlers[:] = saved[0]
    package_logger.setLevel(saved[1])
    package_logger.propagate = saved[2]
