import threading
import time
from unittest import mock

import pytest

from algendado.database import AgendaDatabase
from algendado.notifications import (
    AUTO_CLOSE_SECONDS,
    START_OFFSET,
    NotificationStack,
    Notifier,
    send_notification,
)
from algendado.utils import combine_datetime


def test_multiple_stack_order_and_positions():
    stack = NotificationStack()
    stack.add("📅 First Notification", "Meeting with team at 2:00 PM", "14:00")
    stack.add("📅 Second Notification", "Doctor appointment at 3:00 PM", "15:00")
    stack.add("📅 Third Notification", "Grocery shopping reminder", "16:00")
    stack.add("📅 Fourth Notification", "Call mom about dinner plans", "17:00")
    assert len(stack) == 4
    cards = list(stack)
    assert [c.title for c in cards] == [
        "📅 Fourth Notification",
        "📅 Third Notification",
        "📅 Second Notification",
        "📅 First Notification",
    ]
    assert [c.position_index for c in cards] == [0, 1, 2, 3]
    assert cards[3].message == "Meeting with team at 2:00 PM"
    assert cards[0].time_str == "17:00"


def test_new_notification_starts_offscreen_with_full_timer():
    stack = NotificationStack()
    card = stack.add("t", "m", "12:00")
    assert card.slide_offset == START_OFFSET
    assert card.auto_close_timer == AUTO_CLOSE_SECONDS


def test_fields_are_truncated():
    stack = NotificationStack()
    card = stack.add("x" * 100, "y" * 600, "z" * 40)
    assert len(card.title) == 63
    assert len(card.message) == 511
    assert len(card.time_str) == 31


def test_update_moves_towards_target():
    stack = NotificationStack()
    card = stack.add("t", "m", "12:00")
    stack.update(0.05)
    assert START_OFFSET < card.slide_offset < card.target_y
    assert card.auto_close_timer < AUTO_CLOSE_SECONDS


def test_update_expires_and_reindexes():
    stack = NotificationStack()
    older = stack.add("older", "m", "1")
    stack.update(20)
    newer = stack.add("newer", "m", "2")
    assert older.position_index == 1
    expired = stack.update(15)
    assert expired == [older]
    assert list(stack) == [newer]
    assert newer.position_index == 0


def test_remove_reindexes_from_zero():
    stack = NotificationStack()
    a = stack.add("a", "m", "1")
    b = stack.add("b", "m", "2")
    c = stack.add("c", "m", "3")
    stack.remove(b)
    assert list(stack) == [c, a]
    assert [n.position_index for n in stack] == [0, 1]


def test_clear_empties_stack():
    stack = NotificationStack()
    stack.add("a", "m", "1")
    stack.add("b", "m", "2")
    stack.clear()
    assert len(stack) == 0


@pytest.mark.parametrize("code,expected", [(0, True), (1, False)])
def test_send_notification_result(code, expected):
    with mock.patch("subprocess.run") as run:
        run.return_value = mock.Mock(returncode=code)
        assert send_notification("Title", 'say "hi"') is expected
    command = run.call_args[0][0]
    assert command[0] == "osascript"
    assert '\\"hi\\"' in command[2]


def test_send_notification_missing_tool():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError):
        assert send_notification("Title", "msg") is False


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "agenda.db")


def test_check_once_notifies_and_marks(db_path):
    due = combine_datetime("2030-01-15", "10:15:00")
    with AgendaDatabase(db_path) as db:
        db.add_item("2030-01-15", "10:15:00", "Dentist")
    stack = NotificationStack()
    notifier = Notifier(db_path, stack, 30)
    with mock.patch("subprocess.run") as run, mock.patch("subprocess.Popen") as popen:
        run.return_value = mock.Mock(returncode=0)
        handled = notifier.check_once(due - 15 * 60)
        again = notifier.check_once(due - 15 * 60)
    assert [item.description for item in handled] == ["Dentist"]
    assert again == []
    card = next(iter(stack))
    assert (card.title, card.message, card.time_str) == ("Agenda Reminder", "Dentist", "10:15 AM")
    assert popen.call_count == 1
    assert popen.call_args[0][0][-3:] == ["Agenda Reminder", "Dentist", "10:15 AM"]


def test_check_once_ignores_items_outside_window(db_path):
    due = combine_datetime("2030-01-15", "10:15:00")
    with AgendaDatabase(db_path) as db:
        db.add_item("2030-01-15", "10:15:00", "Later")
    stack = NotificationStack()
    with mock.patch("subprocess.run"), mock.patch("subprocess.Popen") as popen:
        handled = Notifier(db_path, stack, 30).check_once(due - 60 * 60)
    assert handled == []
    assert len(stack) == 0
    assert popen.call_count == 0


def test_run_until_stopped(db_path):
    moment = time.localtime(time.time() + 15 * 60)
    with AgendaDatabase(db_path) as db:
        db.add_item(
            time.strftime("%Y-%m-%d", moment), time.strftime("%H:%M:%S", moment), "Call"
        )
    stack = NotificationStack()
    notifier = Notifier(db_path, stack, 60)
    with mock.patch("subprocess.run") as run, mock.patch("subprocess.Popen"):
        run.return_value = mock.Mock(returncode=0)
        worker = threading.Thread(target=notifier.run)
        worker.start()
        deadline = time.time() + 5
        while len(stack) == 0 and time.time() < deadline:
            time.sleep(0.05)
        notifier.stop()
        worker.join(5)
    assert not worker.is_alive()
    assert [card.message for card in stack] == ["Call"]