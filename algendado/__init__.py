"""Personal agenda: SQLite storage, command-line client, web and ICS calendar, and desktop reminders."""

__version__ = "0.1.0"