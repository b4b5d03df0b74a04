"""
SQLite-backed store for per-application notification settings.

Provides CRUD operations for the `notification_setting` table:
- Schema creation on first use
- Upsert of a settings record
- Delete by application id or by owning package
- Count and lookup by package

Uses stdlib sqlite3 with no ORM.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import stat
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Iterator, Optional

from notificationparser.domain.errors import InvalidStateError, StoreIOError
from notificationparser.domain.models import SettingsRecord
from notificationparser.infrastructure.sqlite import schema

logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "appid, notification, sounds, contents, badge, pkgid"


class SettingsStore:
    """
    SQLite-backed storage for notification settings.

    The connection is opened on demand and held until `disconnect()`;
    hooks wrap their work in `session()` so nothing outlives one call.

    Usage:
        store = SettingsStore(Path("/opt/usr/dbspace/.notification_parser.db"))
        with store.session():
            store.upsert(record)
            store.count_by_package("org.example.pkg")
    """

    def __init__(self, db_path: Path | str) -> None:
        """
        Initialize settings store.

        Args:
            db_path: Path to SQLite database file (created if not exists)
        """
        self.db_path = Path(db_path)
        self._connection: sqlite3.Connection | None = None
        logger.debug("SettingsStore initialized: %s", self.db_path)

    @property
    def is_connected(self) -> bool:
        """Whether a connection is currently open."""
        return self._connection is not None

    # ========================================================================
    # Connection Management
    # ========================================================================

    def connect(self) -> None:
        """
        Open the database and make sure the settings table exists.

        No-op when a connection is already open.

        Raises:
            InvalidStateError: The database path is not a regular file
            StoreIOError: The database cannot be opened or initialized
        """
        if self._connection is not None:
            return

        self._check_regular_file()

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # Autocommit; transactions are issued explicitly
            conn = sqlite3.connect(self.db_path, isolation_level=None)
        except (OSError, sqlite3.Error) as exc:
            logger.error("Failed to open %s: %s", self.db_path, exc)
            raise StoreIOError(f"Cannot open database {self.db_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        self._connection = conn
        logger.debug("Database connection established")

        try:
            self.ensure_schema()
        except StoreIOError:
            self.disconnect()
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        logger.debug("Database connection closed")

    close = disconnect

    @contextmanager
    def session(self) -> Iterator[SettingsStore]:
        """Connect on entry and disconnect on exit, on every exit path."""
        self.connect()
        try:
            yield self
        finally:
            self.disconnect()

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self.connect()
        assert self._connection is not None
        return self._connection

    def _check_regular_file(self) -> None:
        """Reject a database path that exists but is not a regular file."""
        if not os.path.lexists(self.db_path):
            return
        try:
            mode = os.lstat(self.db_path).st_mode
        except OSError as exc:
            raise StoreIOError(f"Cannot stat {self.db_path}: {exc}") from exc
        if not stat.S_ISREG(mode):
            logger.error("%s is not a regular file", self.db_path)
            raise InvalidStateError(f"{self.db_path} is not a regular file")

    # ========================================================================
    # Schema Management
    # ========================================================================

    def ensure_schema(self) -> bool:
        """
        Create the settings table if the database is new or empty.

        Safe to call multiple times. Runs in an explicit transaction which
        is rolled back on failure.

        Returns:
            True if the table was created, False if it already existed
        """
        conn = self._get_connection()

        try:
            if schema.table_exists(conn):
                return False

            if self.db_path.exists() and self.db_path.stat().st_size:
                logger.warning("%s exists without %s table", self.db_path, schema.TABLE_NAME)
            else:
                logger.info("Creating notification settings database at %s", self.db_path)

            conn.execute("BEGIN TRANSACTION")
            try:
                schema.create_table(conn)
            except sqlite3.Error:
                conn.execute("ROLLBACK TRANSACTION")
                raise
            conn.execute("COMMIT TRANSACTION")
        except (OSError, sqlite3.Error) as exc:
            logger.error("Failed to create %s: %s", schema.TABLE_NAME, exc)
            raise StoreIOError(f"Cannot create {schema.TABLE_NAME}: {exc}") from exc

        return True

    # ========================================================================
    # Writes
    # ========================================================================

    def _execute(self, query: str, params: tuple) -> int:
        """Run one statement and return the number of rows it changed."""
        conn = self._get_connection()
        try:
            with closing(conn.execute(query, params)) as cursor:
                return cursor.rowcount
        except sqlite3.Error as exc:
            logger.error("%s", exc)
            raise StoreIOError(str(exc)) from exc

    def upsert(self, record: SettingsRecord) -> None:
        """
        Insert a settings record, replacing any existing row for its app id.

        Args:
            record: Fully populated settings record
        """
        self._execute(
            """
            INSERT OR REPLACE INTO notification_setting
            (appid, notification, sounds, contents, badge, pkgid, reserved1, reserved2)
            VALUES (?, ?, ?, ?, ?, ?, NULL, NULL)
            """,
            record.as_row(),
        )
        logger.debug("Upserted notification setting for %s (%s)", record.app_id, record.package_id)

    def delete_by_app_id(self, app_id: str) -> int:
        """
        Delete the settings row of one application.

        A missing row is not an error.

        Returns:
            Number of rows deleted (0 or 1)
        """
        deleted = self._execute("DELETE FROM notification_setting WHERE appid = ?", (app_id,))
        logger.debug("Deleted %d notification setting(s) for app %s", deleted, app_id)
        return deleted

    def delete_by_package(self, package_id: str) -> int:
        """
        Delete every settings row owned by a package.

        Returns:
            Number of rows deleted
        """
        deleted = self._execute(
            """
            DELETE FROM notification_setting
            WHERE appid IN (SELECT appid FROM notification_setting WHERE pkgid = ?)
            """,
            (package_id,),
        )
        logger.debug("Deleted %d notification setting(s) for package %s", deleted, package_id)
        return deleted

    # ========================================================================
    # Reads
    # ========================================================================

    def count_by_package(self, package_id: str) -> int:
        """Count settings rows owned by a package."""
        conn = self._get_connection()
        try:
            with closing(
                conn.execute(
                    "SELECT COUNT(*) FROM notification_setting WHERE pkgid = ?",
                    (package_id,),
                )
            ) as cursor:
                row = cursor.fetchone()
        except sqlite3.Error as exc:
            logger.error("%s", exc)
            raise StoreIOError(str(exc)) from exc
        return int(row[0]) if row else 0

    def get(self, app_id: str) -> Optional[SettingsRecord]:
        """Get the settings record of one application, if any."""
        rows = self._select(f"SELECT {_SELECT_COLUMNS} FROM notification_setting WHERE appid = ?", (app_id,))
        return rows[0] if rows else None

    def list_records(self, package_id: str | None = None) -> list[SettingsRecord]:
        """List settings records, optionally only those of one package."""
        if package_id is None:
            return self._select(f"SELECT {_SELECT_COLUMNS} FROM notification_setting ORDER BY appid", ())
        return self._select(
            f"SELECT {_SELECT_COLUMNS} FROM notification_setting WHERE pkgid = ? ORDER BY appid",
            (package_id,),
        )

    def _select(self, query: str, params: tuple) -> list[SettingsRecord]:
        conn = self._get_connection()
        try:
            with closing(conn.execute(query, params)) as cursor:
                rows = cursor.fetchall()
        except sqlite3.Error as exc:
            logger.error("%s", exc)
            raise StoreIOError(str(exc)) from exc
        return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> SettingsRecord:
        return SettingsRecord(
            app_id=row["appid"],
            notification=row["notification"],
            sounds=row["sounds"],
            contents=row["contents"],
            badge=row["badge"],
            package_id=row["pkgid"],
        )
