"""Command-line client for adding, listing and removing agenda items."""

from __future__ import annotations

import re
import shutil
import subprocess
import sys
import time

from .database import AgendaDatabase, DatabaseError
from .models import DB_PATH, SERVER_PORT, parse_view
from .utils import (
    format_date_for_display,
    format_time_for_display,
    parse_date_input,
    parse_time_input,
    server_is_running,
)

USAGE = """Usage:
  algen add <date> <time> "<description>"
  algen get <period>
  algen remove <id>

Date formats:
  today, tomorrow, or DD/MM/YYYY

Time formats:
  HH:MM or HH:MM:SS

Period options:
  today, week, month

Examples:
  algen add today 11:15:00 "finish the project"
  algen add tomorrow 14:30 "meeting with team"
  algen add 15/07/2025 09:00 "doctor appointment"
  algen get today
  algen get week
  algen remove 5"""

_ID_RE = re.compile(r"\s*[+-]?\d+")


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def start_server_if_needed(port: int = SERVER_PORT) -> bool:
    """Launch the agenda server in the background unless one answers on ``port``."""
    if server_is_running(port=port):
        return False
    print("Starting agenda server...")
    executable = shutil.which("algen-server")
    command = [executable] if executable else [sys.executable, "-m", "algendado.server"]
    try:
        subprocess.Popen(command, start_new_session=True)
    except OSError:
        return False
    time.sleep(1)
    return True


def _add(db: AgendaDatabase, args: list[str]) -> int:
    if len(args) < 4:
        _error("Error: Insufficient arguments for add command")
        print(USAGE)
        return 1
    _, raw_date, raw_time, description = args[:4]
    try:
        date = parse_date_input(raw_date)
    except ValueError:
        _error(f"Error: Invalid date format '{raw_date}'")
        return 1
    try:
        clock = parse_time_input(raw_time)
    except ValueError:
        _error(f"Error: Invalid time format '{raw_time}'")
        return 1

    start_server_if_needed()

    try:
        db.add_item(date, clock, description)
    except (DatabaseError, ValueError):
        _error("Error: Failed to add item to database")
        return 1
    print(
        f"Added: {format_date_for_display(date)} at "
        f"{format_time_for_display(clock)} - {description}"
    )
    return 0


def _get(db: AgendaDatabase, args: list[str]) -> int:
    if len(args) < 2:
        _error("Error: Insufficient arguments for get command")
        print(USAGE)
        return 1
    period = args[1]
    try:
        view = parse_view(period)
    except ValueError:
        _error(f"Error: Invalid period '{period}'")
        print(USAGE)
        return 1
    try:
        items = db.get_items(view)
    except DatabaseError:
        _error("Error: Failed to retrieve items from database")
        return 1
    if not items:
        print(f"No agenda items found for {period}.")
        return 0
    print(f"Agenda items for {period}:\n")
    for item in items:
        print(
            f"[ID: {item.id}] {format_date_for_display(item.date)} at "
            f"{format_time_for_display(item.time)}"
        )
        print(f"        {item.description}\n")
    return 0


def _remove(db: AgendaDatabase, args: list[str]) -> int:
    if len(args) < 2:
        _error("Error: Missing ID for remove command")
        print(USAGE)
        return 1
    raw = args[1]
    item_id = int(raw) if _ID_RE.fullmatch(raw) else 0
    if item_id <= 0:
        _error(f"Error: Invalid ID '{raw}'. ID must be a positive number.")
        return 1

    start_server_if_needed()

    try:
        db.remove_item(item_id)
    except DatabaseError as exc:
        _error(str(exc))
        _error(f"Failed to remove agenda item with ID {item_id}")
        return 1
    print(f"Successfully removed agenda item with ID {item_id}")
    return 0


_COMMANDS = {"add": _add, "get": _get, "remove": _remove}


def main(argv: list[str] | None = None) -> int:
    """Run one client command and return its exit code."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print(USAGE)
        return 1
    try:
        db = AgendaDatabase(DB_PATH)
    except DatabaseError:
        _error("Error: Failed to initialize database")
        return 1
    with db:
        command = _COMMANDS.get(args[0])
        if command is None:
            _error(f"Error: Unknown command '{args[0]}'")
            print(USAGE)
            return 1
        return command(db, args)