"""Parsing and formatting of dates and times, and a server liveness probe."""

from __future__ import annotations

import re
import socket
import time as _time
from datetime import date as _date
from datetime import timedelta

from .models import SERVER_PORT

_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _scan(text: str, sep: str, count: int) -> list[int]:
    """Read up to ``count`` integers separated by ``sep`` from the start of ``text``."""
    values: list[int] = []
    pos = 0
    for index in range(count):
        if index:
            if not text.startswith(sep, pos):
                break
            pos += len(sep)
        match = _INT_RE.match(text, pos)
        if not match:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def parse_date_input(text: str, today: _date | None = None) -> str:
    """Turn 'today', 'tomorrow' or DD/MM/YYYY into a YYYY-MM-DD string."""
    base = today if today is not None else _date.today()
    if text == "today":
        target = base
    elif text == "tomorrow":
        target = base + timedelta(days=1)
    else:
        values = _scan(text, "/", 3)
        if len(values) != 3:
            raise ValueError(f"Invalid date format '{text}'")
        day, month, year = values
        try:
            target = _date(year, month, day)
        except ValueError as exc:
            raise ValueError(f"Invalid date format '{text}'") from exc
    return target.isoformat()


def parse_time_input(text: str) -> str:
    """Turn HH:MM or HH:MM:SS into a zero-padded HH:MM:SS string."""
    values = _scan(text, ":", 3)
    if len(values) == 3:
        hour, minute, second = values
        if 0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59:
            return f"{hour:02d}:{minute:02d}:{second:02d}"
    if len(values) >= 2:
        hour, minute = values[:2]
        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return f"{hour:02d}:{minute:02d}:00"
    raise ValueError(f"Invalid time format '{text}'")


def combine_datetime(date: str, time: str) -> int:
    """Return the local Unix timestamp for a YYYY-MM-DD date and HH:MM:SS time."""
    date_parts = _scan(date, "-", 3)
    time_parts = _scan(time, ":", 3)
    if len(date_parts) != 3 or len(time_parts) != 3:
        raise ValueError("Invalid date/time format")
    year, month, day = date_parts
    hour, minute, second = time_parts
    try:
        return int(_time.mktime((year, month, day, hour, minute, second, 0, 0, -1)))
    except (OverflowError, ValueError) as exc:
        raise ValueError("Invalid date/time format") from exc


def format_date_for_display(date: str) -> str:
    """Render YYYY-MM-DD as e.g. 'Tuesday, July 15, 2025'; other text is returned as is."""
    values = _scan(date, "-", 3)
    if len(values) != 3:
        return date
    try:
        parsed = _date(*values)
    except ValueError:
        return date
    return parsed.strftime("%A, %B %d, %Y")


def format_time_for_display(time: str) -> str:
    """Render HH:MM:SS on a 12-hour clock; other text is returned as is."""
    values = _scan(time, ":", 3)
    if len(values) != 3:
        return time
    hour, minute, _second = values
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return time
    hour12 = hour % 12 or 12
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour12:02d}:{minute:02d} {suffix}"


def is_same_day(t1: float, t2: float) -> bool:
    """Whether two timestamps fall on the same local calendar day."""
    a, b = _time.localtime(t1), _time.localtime(t2)
    return (a.tm_year, a.tm_mon, a.tm_mday) == (b.tm_year, b.tm_mon, b.tm_mday)


def is_same_week(t1: float, t2: float) -> bool:
    """Whether two timestamps share a year and a seven-day block of that year."""
    a, b = _time.localtime(t1), _time.localtime(t2)
    return a.tm_year == b.tm_year and (a.tm_yday - 1) // 7 == (b.tm_yday - 1) // 7


def is_same_month(t1: float, t2: float) -> bool:
    """Whether two timestamps fall in the same local month."""
    a, b = _time.localtime(t1), _time.localtime(t2)
    return (a.tm_year, a.tm_mon) == (b.tm_year, b.tm_mon)


def server_is_running(host: str = "127.0.0.1", port: int = SERVER_PORT) -> bool:
    """Whether something accepts TCP connections on ``host``:``port``."""
    try:
        with socket.create_connection((host, port), timeout=1.0):
            return True
    except OSError:
        return False