"""Traffic Monitor - Data models"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LogEntry:
    """Parsed Common Log Format entry"""
    client_ip: str
    user_id: str
    timestamp: datetime
    method: str
    section: str
    resource: str
    status: int
    size: int
