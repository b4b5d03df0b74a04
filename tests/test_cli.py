"""
Tests for the notificationparser CLI using typer's CliRunner.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from notificationparser.infrastructure.sqlite import SettingsStore
from notificationparser.interface.cli import app

pytestmark = pytest.mark.interface

runner = CliRunner()

SETTINGS_MANIFEST = """<notifications>
    <setting appid="{app_id}">
        <notification section="badge">off</notification>
    </setting>
</notifications>
"""

PACKAGE_MANIFEST = """<manifest package="P">
    <ui-application appid="a1"/>
</manifest>
"""


@pytest.fixture
def env(tmp_path: Path, monkeypatch) -> dict:
    for var in (
        "NOTIFICATION_PARSER_CONFIG",
        "NOTIFICATION_PARSER_DB",
        "NOTIFICATION_PARSER_MANIFEST_DIR",
        "NOTIFICATION_PARSER_LOG_LEVEL",
        "NOTIFICATION_PARSER_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)

    manifests = tmp_path / "packages"
    manifests.mkdir()
    (manifests / "P.xml").write_text(PACKAGE_MANIFEST, encoding="utf-8")

    return {
        "db": tmp_path / "settings.db",
        "manifests": manifests,
        "tmp": tmp_path,
    }


def _write_manifest(tmp: Path, app_id: str) -> Path:
    path = tmp / f"{app_id}.xml"
    path.write_text(SETTINGS_MANIFEST.format(app_id=app_id), encoding="utf-8")
    return path


def _invoke(env: dict, *args: str):
    return runner.invoke(
        app,
        ["--db", str(env["db"]), "--manifest-dir", str(env["manifests"]), *args],
    )


def _app_ids(env: dict) -> list[str]:
    with SettingsStore(env["db"]).session() as store:
        return [r.app_id for r in store.list_records()]


class TestCli:
    def test_init(self, env: dict):
        result = _invoke(env, "init")

        assert result.exit_code == 0, result.output
        assert env["db"].is_file()
        assert "0 records" in result.output

    def test_install_and_show(self, env: dict):
        manifest = _write_manifest(env["tmp"], "a1")

        result = _invoke(env, "install", str(manifest), "--pkgid", "P")
        assert result.exit_code == 0, result.output

        result = _invoke(env, "show", "a1")
        assert result.exit_code == 0, result.output
        assert "a1" in result.output
        assert "off" in result.output

    def test_show_missing(self, env: dict):
        result = _invoke(env, "show", "ghost")
        assert result.exit_code == 1

    def test_install_missing_appid_fails(self, env: dict):
        bad = env["tmp"] / "bad.xml"
        bad.write_text("<notifications><setting/></notifications>", encoding="utf-8")

        result = _invoke(env, "install", str(bad), "--pkgid", "P")

        assert result.exit_code == 22  # EINVAL
        assert _app_ids(env) == []

    def test_upgrade_replaces_package_rows(self, env: dict):
        _invoke(env, "install", str(_write_manifest(env["tmp"], "old")), "--pkgid", "P")

        result = _invoke(env, "upgrade", str(_write_manifest(env["tmp"], "new")), "--pkgid", "P")

        assert result.exit_code == 0, result.output
        assert "Removed 1" in result.output
        assert _app_ids(env) == ["new"]

    def test_uninstall_explicit_app_ids(self, env: dict):
        _invoke(env, "install", str(_write_manifest(env["tmp"], "a1")), "--pkgid", "P")
        _invoke(env, "install", str(_write_manifest(env["tmp"], "b1")), "--pkgid", "Q")

        result = _invoke(env, "uninstall", "--pkgid", "Q", "--app-id", "b1")

        assert result.exit_code == 0, result.output
        assert _app_ids(env) == ["a1"]

    def test_uninstall_looks_up_package_manifest(self, env: dict):
        _invoke(env, "install", str(_write_manifest(env["tmp"], "a1")), "--pkgid", "P")

        result = _invoke(env, "uninstall", "--pkgid", "P")

        assert result.exit_code == 0, result.output
        assert _app_ids(env) == []

    def test_uninstall_unknown_package(self, env: dict):
        result = _invoke(env, "uninstall", "--pkgid", "unknown")
        assert result.exit_code == 22

    def test_list(self, env: dict):
        _invoke(env, "install", str(_write_manifest(env["tmp"], "a1")), "--pkgid", "P")
        _invoke(env, "install", str(_write_manifest(env["tmp"], "b1")), "--pkgid", "Q")

        result = _invoke(env, "list", "--pkgid", "Q")

        assert result.exit_code == 0, result.output
        assert "b1" in result.output
        assert "a1" not in result.output

    def test_list_empty(self, env: dict):
        result = _invoke(env, "list")
        assert result.exit_code == 0
        assert "No notification settings" in result.output

    def test_bad_config(self, env: dict):
        result = runner.invoke(app, ["--config", str(env["tmp"] / "absent.json"), "list"])
        assert result.exit_code == 22
