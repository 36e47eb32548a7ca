"""Core data types and configuration shared across the agenda package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SERVER_PORT = 8080
DB_PATH = "agenda.db"
MAX_DESCRIPTION_LEN = 256
MAX_DATE_LEN = 32
MAX_TIME_LEN = 16
NOTIFICATION_ADVANCE_MINUTES = 15


@dataclass(frozen=True)
class AgendaItem:
    """One scheduled agenda entry as stored in the database."""

    id: int
    date: str  # YYYY-MM-DD
    time: str  # HH:MM:SS
    description: str
    datetime: int  # Unix timestamp
    notified: bool = False


class View(Enum):
    """Period of time an agenda listing covers."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"


def parse_view(name: str) -> View:
    """Return the view named by ``name`` (today, week or month)."""
    for view in View:
        if view.value == name:
            return view
    raise ValueError(f"Invalid period '{name}'")