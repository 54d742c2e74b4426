"""Traffic Monitor package"""

from .patterns import VERSION
from .models import LogEntry
from .parser import MalformedLine, parse_line
from .config import MonitorConfig, parse_duration
from .scheduler import PeriodicTask, Scheduler
from .monitor import TrafficMonitor, run

__all__ = [
    'VERSION', 'LogEntry', 'MalformedLine', 'parse_line', 'MonitorConfig',
    'parse_duration', 'PeriodicTask', 'Scheduler', 'TrafficMonitor', 'run',
]
