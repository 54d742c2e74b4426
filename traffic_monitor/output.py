"""Traffic Monitor - Report output"""

import threading
from typing import TextIO


class ReportWriter:
    """Writes report lines to the output sink.

    Reports come from the scheduler thread and parse warnings from the
    reader thread; writes are serialized so lines never interleave.
    Messages are written verbatim, control characters included.
    """

    def __init__(self, output: TextIO):
        self.output = output
        self._lock = threading.Lock()

    def write(self, message: str):
        with self._lock:
            self.output.write(message + "\n")
            self.output.flush()
