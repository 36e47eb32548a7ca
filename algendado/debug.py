"""Diagnostic report of stored items and pending notifications."""

from __future__ import annotations

import sys
import time

from .database import AgendaDatabase, DatabaseError
from .models import DB_PATH, NOTIFICATION_ADVANCE_MINUTES, View


def _stamp(moment: float) -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(moment))


def main(argv: list[str] | None = None) -> int:
    """Print the database contents and the notification window; return an exit code."""
    print("=== Agenda Debug Tool ===\n")
    try:
        db = AgendaDatabase(DB_PATH)
    except DatabaseError:
        print("Failed to initialize database", file=sys.stderr)
        return 1

    with db:
        now = int(time.time())

        print("1. All items in database:")
        try:
            items = db.get_items(View.MONTH, now)
        except DatabaseError:
            items = []
        for item in items:
            print(
                f"   ID: {item.id}, Date: {item.date}, Time: {item.time}, "
                f"Description: {item.description}"
            )
            print(
                f"   Datetime: {item.datetime} ({_stamp(item.datetime)}), "
                f"Notified: {int(item.notified)}\n"
            )

        print(f"2. Current time: {now} ({_stamp(now)})\n")

        target = now + NOTIFICATION_ADVANCE_MINUTES * 60
        start, end = target - 30, target + 30
        print("3. Notification window:")
        print(f"   Start: {start} ({_stamp(start)})")
        print(f"   End:   {end} ({_stamp(end)})\n")

        print("4. Pending notifications:")
        try:
            pending = db.get_pending_notifications(now)
        except DatabaseError:
            print("   Error getting pending notifications")
        else:
            print(f"   Found {len(pending)} pending notifications")
            for item in pending:
                print(f"   - {item.date} at {item.time}: {item.description}")
    return 0