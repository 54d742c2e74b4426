"""Traffic Monitor - Streaming aggregation and alerting"""

import logging
import threading
from collections import Counter
from datetime import datetime
from typing import Callable, Iterable, Optional, TextIO

from .config import MonitorConfig
from .models import LogEntry
from .output import ReportWriter
from .parser import MalformedLine, parse_line
from .patterns import (
    BUSIEST_SECTIONS_MESSAGE,
    HIGH_TRAFFIC_MESSAGE,
    HIGH_TRAFFIC_RESOLVED_MESSAGE,
    MALFORMED_LINE_MESSAGE,
    NO_HITS_MESSAGE,
)
from .scheduler import PeriodicTask, Scheduler

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


def format_rfc3339(moment: datetime) -> str:
    return moment.isoformat(timespec='seconds')


class TrafficMonitor:
    """Tracks section hits and total traffic for a stream of log lines.

    Section counters and the traffic total share one lock, so a report
    always sees both fully updated or not updated at all.
    """

    def __init__(self, config: MonitorConfig, output: TextIO,
                 clock: Callable[[], datetime] = _now):
        self.config = config
        self.writer = ReportWriter(output)
        self.clock = clock
        self.section_hits: Counter = Counter()
        self.total_traffic = 0
        self.high_traffic_triggered = False
        self._lock = threading.Lock()

    def ingest(self, line: str) -> Optional[LogEntry]:
        """Parse one line and count it. Malformed lines are warned about and skipped."""
        try:
            entry = parse_line(line)
        except MalformedLine as e:
            logger.debug("Skipping malformed line: %s", e.line)
            self.writer.write(MALFORMED_LINE_MESSAGE.format(error=e))
            return None

        with self._lock:
            self.section_hits[entry.section] += 1
            self.total_traffic += 1
        return entry

    def run_update_report(self):
        """Report the busiest sections since the previous report."""
        with self._lock:
            section_hits = self.section_hits
            self.section_hits = Counter()

        max_hits = max(section_hits.values(), default=0)
        if max_hits == 0:
            self.writer.write(NO_HITS_MESSAGE)
            return

        busiest = sorted(section for section, hits in section_hits.items() if hits == max_hits)
        hits_per_second = max_hits / self.config.update_interval
        self.writer.write(BUSIEST_SECTIONS_MESSAGE.format(
            sections=', '.join(busiest),
            rate=hits_per_second,
        ))

    def run_traffic_check(self):
        """Raise or resolve the high-traffic alert for the window that just ended."""
        threshold = self.config.high_traffic_threshold
        message = None

        with self._lock:
            total = self.total_traffic
            self.total_traffic = 0

            if total > threshold and not self.high_traffic_triggered:
                self.high_traffic_triggered = True
                transition = 'triggered'
                message = HIGH_TRAFFIC_MESSAGE.format(
                    rate=total / self.config.high_traffic_interval,
                    time=format_rfc3339(self.clock()),
                )
            elif total <= threshold and self.high_traffic_triggered:
                self.high_traffic_triggered = False
                transition = 'resolved'
                message = HIGH_TRAFFIC_RESOLVED_MESSAGE.format(
                    time=format_rfc3339(self.clock()),
                )

        if message:
            logger.info('High traffic %s (%d hits, threshold %d)', transition, total, threshold)
            self.writer.write(message)

    def scheduler(self) -> Scheduler:
        return Scheduler([
            PeriodicTask('update-report', self.config.update_interval, self.run_update_report),
            PeriodicTask('traffic-check', self.config.high_traffic_interval, self.run_traffic_check),
        ])

    def run(self, input_stream: Iterable[str]):
        """Consume lines until end-of-stream, reporting in the background.

        Read errors propagate to the caller; the scheduler is stopped
        before this method returns either way.
        """
        lines = 0
        with self.scheduler():
            for raw in input_stream:
                lines += 1
                self.ingest(raw.strip())
        logger.debug("Input exhausted after %d lines", lines)


def run(config: MonitorConfig, input_stream: Iterable[str], output: TextIO):
    """Monitor `input_stream` with `config`, writing reports to `output`."""
    TrafficMonitor(config, output).run(input_stream)
