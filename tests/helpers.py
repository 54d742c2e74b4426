"""Shared test helpers"""

import io
import queue
import threading
import time
from datetime import datetime, timezone


from traffic_monitor.patterns import COMMON_LOG_DATE_FORMAT

FIXED_TIME = datetime(2026, 10, 17, 12, 0, 0, tzinfo=timezone.utc)


def make_line(section="section-a", method="PUT", status=200, size="5034", when=None):
    when = when or datetime.now().astimezone()
    return (
        f'238.129.94.11 - - [{when.strftime(COMMON_LOG_DATE_FORMAT)}] '
        f'"{method} /{section}/posts HTTP/1.0" {status} {size} '
        f'"http://sanchez-malone.com/faq.php" "Mozilla/5.0 (Macintosh; PPC Mac OS X 10_6_8)"'
    )


class SyncBuffer(io.StringIO):
    """StringIO that can be written and read from different threads"""

    def __init__(self):
        super().__init__()
        self._lock = threading.Lock()

    def write(self, s):
        with self._lock:
            return super().write(s)

    def getvalue(self):
        with self._lock:
            return super().getvalue()

    def reset(self):
        with self._lock:
            self.seek(0)
            self.truncate()

    def wait_for_lines(self, count, timeout=5.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            lines = self.getvalue().splitlines()
            if len(lines) >= count:
                return lines
            time.sleep(0.01)
        raise AssertionError(f"expected {count} lines, got {self.getvalue()!r}")


class LineFeed:
    """Blocking line source standing in for a pipe"""

    _END = object()

    def __init__(self):
        self._queue = queue.Queue()

    def send(self, line):
        self._queue.put(line + "\n")

    def close(self):
        self._queue.put(self._END)

    def __iter__(self):
        while True:
            item = self._queue.get()
            if item is self._END:
                return
            yield item
