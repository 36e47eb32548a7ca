"""HTTP interface serving the agenda as a web page and an iCalendar feed."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from .calendar_export import generate_html_calendar, generate_ics_calendar
from .database import AgendaDatabase, DatabaseError
from .models import DB_PATH, SERVER_PORT, View

_log = logging.getLogger(__name__)

_NOT_FOUND_HTML = (
    "<!DOCTYPE html>\n"
    "<html><head><title>404 - Not Found</title></head>\n"
    "<body><h1>404 - Page Not Found</h1>\n"
    "<p>The requested page was not found.</p>\n"
    "<p><a href=\"/\">Return to Calendar</a></p></body></html>"
)


@dataclass
class WebResponse:
    """Status, body and headers of a reply to one request."""

    status: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)


def _response(status: int, body: str, content_type: str, **extra: str) -> WebResponse:
    headers = {"Content-Type": content_type, "Access-Control-Allow-Origin": "*"}
    headers.update(extra)
    return WebResponse(int(status), body, headers)


def handle_web_request(
    db: AgendaDatabase, method: str, url: str, now: float | None = None
) -> WebResponse | None:
    """Route a request; None means the request is refused without a reply."""
    if method != "GET":
        return None
    if url in ("/", "/index.html"):
        try:
            page = generate_html_calendar(db.get_items(View.MONTH, now))
        except DatabaseError:
            return _response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error generating web interface", "text/plain"
            )
        return _response(HTTPStatus.OK, page, "text/html")
    if url == "/calendar.ics":
        try:
            feed = generate_ics_calendar(db.get_items(View.MONTH, now))
        except DatabaseError:
            return _response(
                HTTPStatus.INTERNAL_SERVER_ERROR, "Error generating calendar", "text/plain"
            )
        return _response(
            HTTPStatus.OK,
            feed,
            "text/calendar",
            **{"Content-Disposition": 'attachment; filename="agenda.ics"'},
        )
    return _response(HTTPStatus.NOT_FOUND, _NOT_FOUND_HTML, "text/html")


def make_server(
    db_path: str = DB_PATH, host: str = "", port: int = SERVER_PORT
) -> ThreadingHTTPServer:
    """Build a threaded HTTP server answering from the database at ``db_path``."""

    class _Handler(BaseHTTPRequestHandler):
        def _dispatch(self) -> None:
            path = urlsplit(self.path).path
            with AgendaDatabase(db_path) as db:
                response = handle_web_request(db, self.command, path)
            if response is None:
                self.close_connection = True
                return
            payload = response.body.encode("utf-8")
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = _dispatch
        do_HEAD = _dispatch
        do_POST = _dispatch
        do_PUT = _dispatch
        do_DELETE = _dispatch
        do_PATCH = _dispatch
        do_OPTIONS = _dispatch

        def log_message(self, format: str, *args) -> None:
            _log.debug("%s - " + format, self.address_string(), *args)

    return ThreadingHTTPServer((host, port), _Handler)