# algendado

A small personal agenda that lives on your machine. Agenda items are stored
in a local SQLite database (`agenda.db` in the working directory). You can
list them from the command line and view them as a web page or an ICS
calendar. The server sends a desktop reminder 15 minutes before an item
starts.

## Installation

```
pip install .
```

The reminder windows use `pygame`, which is installed as a dependency.

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
algen add <date> <time> "<description>"
algen get <period>
algen remove <id>
```

Accepted values:

- Dates: `today`, `tomorrow` or `DD/MM/YYYY`.
- Times: `HH:MM` or `HH:MM:SS`.
- Periods: `today`, `week` (the seven days starting on the most recent
  Sunday) and `month` (the current calendar month).

Examples:

```
algen add today 11:15:00 "finish the project"
algen add tomorrow 14:30 "meeting with team"
algen add 15/07/2025 09:00 "doctor appointment"
algen get today
algen get week
algen remove 5
```

`algen get` prints each item with its ID. Pass that ID to `algen remove`.
It must be a positive number, and removing an ID that does not exist is
reported as an error.

When you add or remove an item, `algen` checks whether anything is listening
on port 8080 of `127.0.0.1`. If nothing is, it starts `algen-server` in the
background. When that command cannot be found, it runs
`python -m algendado.server` instead.

Every command exits with status 0 on success and 1 on error.

## Server

```
algen-server
```

The server listens on port 8080 on all interfaces and answers `GET` requests
only. Requests with any other method are closed without a reply.

- `/` or `/index.html` shows the current month's agenda as an HTML page.
- `/calendar.ics` returns the same items as an iCalendar file, as a download
  named `agenda.ics`.
- Any other path gets a 404 page.

While it runs, the server checks the database every 30 seconds for items
that are due about 15 minutes from now (within 30 seconds either way) and
have not yet been notified. For each such item it:

1. sends a system notification through `osascript`,
2. marks the item as notified, so it is reported only once.

After a check that found items, it opens a stacked reminder window for the
last of them. It uses `algen-stack` for this, or
`python -m algendado.popup` if that command cannot be found.

Stop the server with Ctrl+C or SIGTERM. If something already answers on
port 8080, the server says so and exits.

## Reminder windows

You can also open the reminder windows by hand. Each takes exactly three
arguments: title, message and time.

```
algen-notify "Agenda Reminder" "Meeting with team" "02:00 PM"
algen-stack "Agenda Reminder" "Meeting with team" "02:00 PM"
```

- `algen-notify` shows a single popup with an OK button. The message is
  split into lines: at newlines, or at 45 characters if it is one long line.
- `algen-stack` shows reminder cards in the top-right corner of the screen,
  each with a Dismiss button. Messages longer than 75 characters are cut
  short with `...`.

Both windows close by themselves after 30 seconds, or straight away on
Escape or when the window is closed.

## Checking what will be notified

```
algen-debug
```

This prints:

- every item of the current month, with its timestamp and notified flag,
- the current time,
- the notification window being searched,
- the items that are pending a reminder.

## Library use

You can use the pieces from Python as well:

```python
from algendado.database import AgendaDatabase
from algendado.models import View
from algendado.calendar_export import generate_ics_calendar, generate_html_calendar

with AgendaDatabase("agenda.db") as db:
    item_id = db.add_item("2025-07-15", "09:00:00", "doctor appointment")
    items = db.get_items(View.MONTH)
    print(generate_ics_calendar(items))
    db.remove_item(item_id)
```

Modules:

- `algendado.utils`: parsing and formatting helpers, `parse_date_input`,
  `parse_time_input`, `combine_datetime`, `format_date_for_display` and
  `format_time_for_display`.
- `algendado.web`: `handle_web_request`, which routes a request without a
  network, and `make_server`, which builds the HTTP server.
- `algendado.notifications`: `NotificationStack` and `Notifier`, the polling
  worker.
- `algendado.server`: `AgendaServer`, which runs the web interface and the
  worker together.

Database problems raise `algendado.database.DatabaseError`. Invalid dates or
times raise `ValueError`.

## What it does not do

- The web interface is read-only. Items are added and removed only from the
  command line or through `AgendaDatabase`.
- Existing items cannot be edited.
- The commands always use `agenda.db` in the current directory, and the
  server always uses port 8080.
- System notifications rely on the `osascript` command, so they appear only
  where it exists (macOS). The pygame reminder windows are shown regardless.