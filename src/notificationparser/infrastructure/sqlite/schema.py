"""
Schema for the notification settings database.

Table and column names and column order are shared with existing
databases on device and must not change.

    notification_setting
    +-------+--------------+--------+----------+-------+-------+-----------+-----------+
    | appid | notification | sounds | contents | badge | pkgid | reserved1 | reserved2 |
    +-------+--------------+--------+----------+-------+-------+-----------+-----------+
"""
# pylint: disable=line-too-long

import sqlite3

TABLE_NAME = "notification_setting"

COLUMNS = (
    "appid",
    "notification",
    "sounds",
    "contents",
    "badge",
    "pkgid",
    "reserved1",
    "reserved2",
)

CREATE_TABLE_SQL = "CREATE TABLE notification_setting ( appid TEXT PRIMARY KEY NOT NULL, notification TEXT, sounds TEXT, contents TEXT, badge TEXT, pkgid TEXT, reserved1 TEXT, reserved2 TEXT )"


def table_exists(conn: sqlite3.Connection) -> bool:
    """Check whether the settings table is present."""
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
        (TABLE_NAME,),
    ).fetchone()
    return row is not None


def create_table(conn: sqlite3.Connection) -> None:
    """Create the settings table. Caller owns the transaction."""
    conn.execute(CREATE_TABLE_SQL)
