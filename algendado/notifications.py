"""Reminder notifications: the on-screen stack, system alerts and the polling worker."""

from __future__ import annotations

import shutil
import subprocess
import sys
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from .database import AgendaDatabase, DatabaseError
from .models import DB_PATH, AgendaItem
from .utils import format_time_for_display

MAX_TITLE_LEN = 63
MAX_MESSAGE_LEN = 511
MAX_TIME_STR_LEN = 31

AUTO_CLOSE_SECONDS = 30.0
START_OFFSET = -130.0
NOTIFICATION_HEIGHT = 120
STACK_SPACING = 10
ANIMATION_SPEED = 8.0
CHECK_INTERVAL = 30.0
REMINDER_TITLE = "Agenda Reminder"


def _applescript_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def send_notification(title: str, message: str) -> bool:
    """Show a system notification with a sound; return whether it was delivered."""
    script = (
        f'display notification "{_applescript_quote(message)}" '
        f'with title "{_applescript_quote(title)}" sound name "default"'
    )
    try:
        result = subprocess.run(["osascript", "-e", script], check=False)
    except OSError:
        return False
    return result.returncode == 0


@dataclass(eq=False)
class Notification:
    """One card in the notification stack, with its animation state."""

    title: str
    message: str
    time_str: str
    slide_offset: float = START_OFFSET
    auto_close_timer: float = AUTO_CLOSE_SECONDS
    position_index: int = 0

    @property
    def target_y(self) -> float:
        return 10 + self.position_index * (NOTIFICATION_HEIGHT + STACK_SPACING)


class NotificationStack:
    """Thread-safe stack of notifications, newest first."""

    def __init__(self) -> None:
        self._items: list[Notification] = []
        self._lock = threading.RLock()

    def _reindex(self) -> None:
        for index, notification in enumerate(self._items):
            notification.position_index = index

    def add(self, title: str, message: str, time_str: str) -> Notification:
        """Put a new notification on top of the stack and return it."""
        notification = Notification(
            title[:MAX_TITLE_LEN], message[:MAX_MESSAGE_LEN], time_str[:MAX_TIME_STR_LEN]
        )
        with self._lock:
            self._items.insert(0, notification)
            self._reindex()
        return notification

    def remove(self, notification: Notification) -> None:
        """Take a notification off the stack; unknown ones are ignored."""
        with self._lock:
            if notification in self._items:
                self._items.remove(notification)
            self._reindex()

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def update(self, delta_time: float) -> list[Notification]:
        """Advance animations and timers by ``delta_time`` seconds; return expired cards."""
        expired: list[Notification] = []
        with self._lock:
            for notification in list(self._items):
                target = notification.target_y
                notification.slide_offset += (
                    (target - notification.slide_offset) * ANIMATION_SPEED * delta_time
                )
                notification.auto_close_timer -= delta_time
                if notification.auto_close_timer <= 0:
                    self.remove(notification)
                    expired.append(notification)
        return expired

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Notification]:
        with self._lock:
            return iter(list(self._items))


class Notifier:
    """Polls the database for upcoming items and raises reminders for them."""

    def __init__(
        self,
        db_path: str = DB_PATH,
        stack: NotificationStack | None = None,
        interval: float = CHECK_INTERVAL,
    ) -> None:
        self.db_path = db_path
        self.stack = stack if stack is not None else NotificationStack()
        self.interval = interval
        self._stopped = threading.Event()

    def _launch_stack_display(self, title: str, message: str, time_str: str) -> None:
        print("Starting stacked notification display")
        executable = shutil.which("algen-stack")
        command = [executable] if executable else [sys.executable, "-m", "algendado.popup"]
        try:
            subprocess.Popen([*command, title, message, time_str], start_new_session=True)
        except OSError:
            print("Stacked notification executable failed")

    def check_once(self, now: float | None = None) -> list[AgendaItem]:
        """Notify about every pending item once; return the items handled."""
        with AgendaDatabase(self.db_path) as db:
            items = db.get_pending_notifications(now)
            if not items:
                return []
            print(f"Found {len(items)} pending notifications")
            last: tuple[str, str, str] | None = None
            for item in items:
                formatted_time = format_time_for_display(item.time)
                message = item.description[:MAX_MESSAGE_LEN]
                print(
                    f"Adding notification to stack: {item.description} at "
                    f"{formatted_time} (ID: {item.id})"
                )
                self.stack.add(REMINDER_TITLE, message, formatted_time)
                last = (REMINDER_TITLE, message, formatted_time[:MAX_TIME_STR_LEN])
                send_notification(REMINDER_TITLE, item.description)
                db.mark_notified(item.id)
                print(f"Marked item {item.id} as notified")
        if last is not None:
            self._launch_stack_display(*last)
        return items

    def run(self) -> None:
        """Check for reminders every ``interval`` seconds until stopped."""
        print("Notification thread started")
        while not self._stopped.is_set():
            try:
                self.check_once()
            except DatabaseError as exc:
                print(f"Notification check failed: {exc}", file=sys.stderr)
            self._stopped.wait(self.interval)
        print("Notification thread stopped")

    def stop(self) -> None:
        self._stopped.set()