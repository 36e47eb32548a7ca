"""Background agenda server: web interface plus reminder polling."""

from __future__ import annotations

import signal
import sys
import threading

from .database import AgendaDatabase, DatabaseError
from .models import DB_PATH, SERVER_PORT
from .notifications import CHECK_INTERVAL, NotificationStack, Notifier
from .utils import server_is_running
from .web import make_server


class AgendaServer:
    """Runs the HTTP interface and the reminder worker together."""

    def __init__(self, db_path: str = DB_PATH, port: int = SERVER_PORT) -> None:
        self.db_path = db_path
        self.port = port
        self.stack = NotificationStack()
        self._db: AgendaDatabase | None = None
        self._httpd = None
        self._web_thread: threading.Thread | None = None
        self._notifier: Notifier | None = None
        self._notifier_thread: threading.Thread | None = None
        self._running = False
        self._stop_requested = threading.Event()
        self._lock = threading.Lock()

    def start(self) -> bool:
        """Start serving; return False if a server already answers on the port."""
        if server_is_running(port=self.port):
            print(f"Server is already running on port {self.port}")
            return False
        try:
            self._db = AgendaDatabase(self.db_path)
        except DatabaseError:
            print("Failed to initialize database", file=sys.stderr)
            raise
        try:
            self._httpd = make_server(self.db_path, "", self.port)
        except OSError:
            print(f"Failed to start web server on port {self.port}", file=sys.stderr)
            self._db.close()
            self._db = None
            raise
        self.port = self._httpd.server_address[1]
        print(f"Agenda server started on port {self.port}")
        print(f"Web interface: http://localhost:{self.port}")
        print(f"ICS calendar: http://localhost:{self.port}/calendar.ics")

        self._web_thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)
        self._web_thread.start()
        self._notifier = Notifier(self.db_path, self.stack, CHECK_INTERVAL)
        self._notifier_thread = threading.Thread(target=self._notifier.run, daemon=True)
        self._notifier_thread.start()

        self._stop_requested.clear()
        self._running = True
        return True

    def stop(self) -> None:
        """Shut down the worker, the web server and the database; safe to repeat."""
        self._stop_requested.set()
        with self._lock:
            if not self._running:
                return
            self._running = False
        if self._notifier is not None:
            self._notifier.stop()
        if self._notifier_thread is not None:
            self._notifier_thread.join()
        if self._httpd is not None:
            self._httpd.shutdown()
            self._httpd.server_close()
            self._httpd = None
        if self._db is not None:
            self._db.close()
            self._db = None
        print("Server stopped")

    def _on_signal(self, signum, frame) -> None:
        print("\nShutting down server...")
        self._stop_requested.set()

    def serve_forever(self) -> None:
        """Start the server and block until it is stopped or signalled."""
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._on_signal)
            signal.signal(signal.SIGTERM, self._on_signal)
        if not self.start():
            return
        try:
            while not self._stop_requested.wait(1):
                pass
        finally:
            self.stop()


def main(argv: list[str] | None = None) -> int:
    """Run the agenda server until interrupted; return an exit code."""
    print("Starting Algendado Server...")
    try:
        AgendaServer(DB_PATH, SERVER_PORT).serve_forever()
    except (OSError, DatabaseError):
        print("Server failed to start", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())