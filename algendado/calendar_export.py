"""Rendering of agenda items as an iCalendar feed and as an HTML page."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from html import escape

from .models import AgendaItem
from .utils import format_date_for_display, format_time_for_display

_CRLF = "\r\n"


def _ics_block(*fields: tuple[str, str]) -> str:
    return "".join(f"{key}:{value}{_CRLF}" for key, value in fields)


_ICS_HEADER = _ics_block(
    ("BEGIN", "VCALENDAR"),
    ("VERSION", "2.0"),
    ("PRODID", "-//Algendado//Personal Agenda//EN"),
    ("CALSCALE", "GREGORIAN"),
)
_ICS_FOOTER = _ics_block(("END", "VCALENDAR"))


def _indent(*lines: tuple[int, str]) -> str:
    return "".join("    " * depth + text + "\n" for depth, text in lines)


_STYLE_RULES = (
    ("body", (("font-family", "Arial, sans-serif"), ("margin", "20px"),
              ("background-color", "#f5f5f5"))),
    (".container", (("max-width", "800px"), ("margin", "0 auto"),
                    ("background-color", "white"), ("padding", "20px"),
                    ("border-radius", "10px"),
                    ("box-shadow", "0 2px 10px rgba(0,0,0,0.1)"))),
    ("h1", (("color", "#333"), ("text-align", "center"), ("margin-bottom", "30px"))),
    (".agenda-item", (("background-color", "#f9f9f9"),
                      ("border-left", "4px solid #4CAF50"), ("margin", "10px 0"),
                      ("padding", "15px"), ("border-radius", "5px"))),
    (".date-time", (("font-weight", "bold"), ("color", "#2196F3"),
                    ("margin-bottom", "5px"))),
    (".description", (("color", "#666"),)),
    (".no-items", (("text-align", "center"), ("color", "#999"),
                   ("font-style", "italic"), ("padding", "40px"))),
    (".header-actions", (("text-align", "center"), ("margin-bottom", "20px"))),
    (".ics-link", (("display", "inline-block"), ("background-color", "#4CAF50"),
                   ("color", "white"), ("padding", "10px 20px"),
                   ("text-decoration", "none"), ("border-radius", "5px"),
                   ("margin", "5px"))),
    (".ics-link:hover", (("background-color", "#45a049"),)),
)


def _style_rule(selector: str, declarations: tuple[tuple[str, str], ...]) -> str:
    body = "; ".join(f"{prop}: {value}" for prop, value in declarations)
    return f"{selector} {{ {body}; }}"


_HTML_HEADER = _indent(
    (0, "<!DOCTYPE html>"),
    (0, '<html lang="en">'),
    (0, "<head>"),
    (1, '<meta charset="UTF-8">'),
    (1, '<meta name="viewport" content="width=device-width, initial-scale=1.0">'),
    (1, "<title>Personal Agenda</title>"),
    (1, "<style>"),
    *((2, _style_rule(selector, decls)) for selector, decls in _STYLE_RULES),
    (1, "</style>"),
    (0, "</head>"),
    (0, "<body>"),
    (1, '<div class="container">'),
    (2, "<h1>📅 Personal Agenda</h1>"),
    (2, '<div class="header-actions">'),
    (3, '<a href="/calendar.ics" class="ics-link">📱 Download ICS Calendar</a>'),
    (2, "</div>"),
)
_HTML_EMPTY = _indent(
    (2, '<div class="no-items">No agenda items found for this month.</div>'),
)
_HTML_FOOTER = _indent((1, "</div>"), (0, "</body>"), (0, "</html>"))


def _ics_datetime(item: AgendaItem) -> str:
    try:
        moment = datetime.strptime(f"{item.date} {item.time}", "%Y-%m-%d %H:%M:%S")
    except ValueError:
        return item.date.replace("-", "") + "T" + item.time.replace(":", "")
    return moment.strftime("%Y%m%dT%H%M%S")


def _ics_event(item: AgendaItem) -> str:
    stamp = _ics_datetime(item)
    return _ics_block(
        ("BEGIN", "VEVENT"),
        ("UID", f"agenda-item-{item.id}@algendado"),
        ("DTSTAMP", stamp),
        ("DTSTART", stamp),
        ("SUMMARY", item.description),
        ("DESCRIPTION", item.description),
        ("END", "VEVENT"),
    )


def generate_ics_calendar(items: Iterable[AgendaItem]) -> str:
    """Return an iCalendar document with one event per item."""
    return _ICS_HEADER + "".join(_ics_event(item) for item in items) + _ICS_FOOTER


def _html_item(item: AgendaItem) -> str:
    when = f"{format_date_for_display(item.date)} at {format_time_for_display(item.time)}"
    return _indent(
        (2, '<div class="agenda-item">'),
        (3, f'<div class="date-time">{escape(when)}</div>'),
        (3, f'<div class="description">{escape(item.description)}</div>'),
        (2, "</div>"),
    )


def generate_html_calendar(items: Iterable[AgendaItem]) -> str:
    """Return an HTML page listing the items."""
    body = "".join(_html_item(item) for item in items)
    return _HTML_HEADER + (body or _HTML_EMPTY) + _HTML_FOOTER