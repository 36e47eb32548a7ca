"""SQLite storage for agenda items."""

from __future__ import annotations

import sqlite3
import time as _time
from datetime import date as _date
from datetime import timedelta

from .models import DB_PATH, NOTIFICATION_ADVANCE_MINUTES, AgendaItem, View
from .utils import combine_datetime

_DAY = 24 * 60 * 60
_NOTIFY_SLACK = 30

_CREATE_TABLE = (
    "CREATE TABLE IF NOT EXISTS agenda_items ("
    "id INTEGER PRIMARY KEY AUTOINCREMENT,"
    "date TEXT NOT NULL,"
    "time TEXT NOT NULL,"
    "description TEXT NOT NULL,"
    "datetime INTEGER NOT NULL,"
    "notified INTEGER DEFAULT 0"
    ");"
)

_SELECT = "SELECT id, date, time, description, datetime, notified FROM agenda_items "


class DatabaseError(Exception):
    """Raised when the agenda database cannot be read or changed."""


def _local_midnight(day: _date) -> int:
    return int(_time.mktime((day.year, day.month, day.day, 0, 0, 0, 0, 0, -1)))


def view_range(view: View, now: float | None = None) -> tuple[int, int]:
    """Return the [start, end) timestamps that ``view`` covers around ``now``."""
    view = View(view)
    local = _time.localtime(_time.time() if now is None else now)
    today = _date(local.tm_year, local.tm_mon, local.tm_mday)
    if view is View.TODAY:
        start = _local_midnight(today)
        return start, start + _DAY
    if view is View.WEEK:
        days_since_sunday = (today.weekday() + 1) % 7
        start = _local_midnight(today - timedelta(days=days_since_sunday))
        return start, start + 7 * _DAY
    first = today.replace(day=1)
    if first.month == 12:
        following = first.replace(year=first.year + 1, month=1)
    else:
        following = first.replace(month=first.month + 1)
    return _local_midnight(first), _local_midnight(following)


def _to_item(row: tuple) -> AgendaItem:
    item_id, day, clock, description, stamp, notified = row
    return AgendaItem(item_id, day, clock, description, int(stamp), bool(notified))


class AgendaDatabase:
    """A connection to the agenda database, usable as a context manager."""

    def __init__(self, path: str = DB_PATH) -> None:
        try:
            self._conn = sqlite3.connect(path, check_same_thread=False)
            with self._conn:
                self._conn.execute(_CREATE_TABLE)
        except sqlite3.Error as exc:
            raise DatabaseError(f"Cannot open database: {exc}") from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> AgendaDatabase:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _query(self, sql: str, params: tuple) -> list[AgendaItem]:
        try:
            rows = self._conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise DatabaseError(f"Failed to read items: {exc}") from exc
        return [_to_item(row) for row in rows]

    def _write(self, sql: str, params: tuple) -> sqlite3.Cursor:
        try:
            with self._conn:
                return self._conn.execute(sql, params)
        except sqlite3.Error as exc:
            raise DatabaseError(f"Failed to write item: {exc}") from exc

    def add_item(self, date: str, time: str, description: str) -> int:
        """Store a new item and return its id."""
        stamp = combine_datetime(date, time)
        cursor = self._write(
            "INSERT INTO agenda_items (date, time, description, datetime) VALUES (?, ?, ?, ?);",
            (date, time, description, stamp),
        )
        return cursor.lastrowid

    def get_items(self, view: View, now: float | None = None) -> list[AgendaItem]:
        """Items inside the period ``view`` covers, ordered by time."""
        start, end = view_range(view, now)
        return self._query(
            _SELECT + "WHERE datetime >= ? AND datetime < ? ORDER BY datetime;",
            (start, end),
        )

    def get_pending_notifications(self, now: float | None = None) -> list[AgendaItem]:
        """Un-notified items due about fifteen minutes after ``now``."""
        current = int(_time.time() if now is None else now)
        target = current + NOTIFICATION_ADVANCE_MINUTES * 60
        return self._query(
            _SELECT + "WHERE datetime >= ? AND datetime <= ? AND notified = 0 ORDER BY datetime;",
            (target - _NOTIFY_SLACK, target + _NOTIFY_SLACK),
        )

    def mark_notified(self, item_id: int) -> None:
        self._write("UPDATE agenda_items SET notified = 1 WHERE id = ?;", (item_id,))

    def remove_item(self, item_id: int) -> None:
        """Delete an item; raise DatabaseError if no item has that id."""
        cursor = self._write("DELETE FROM agenda_items WHERE id = ?", (item_id,))
        if cursor.rowcount == 0:
            raise DatabaseError(f"No item found with ID {item_id}")