"""Traffic Monitor - Common Log Format line parser"""

import re
from datetime import datetime

from .models import LogEntry
from .patterns import COMMON_LOG_DATE_FORMAT, COMMON_LOG_DATE_PATTERN, COMMON_LOG_PATTERN

COMMON_LOG_REGEX = re.compile(COMMON_LOG_PATTERN)
COMMON_LOG_DATE_REGEX = re.compile(COMMON_LOG_DATE_PATTERN)


class MalformedLine(ValueError):
    """Raised when a line is not a valid Common Log Format entry"""

    def __init__(self, line: str, reason: str = ''):
        self.line = line
        self.reason = reason
        message = f"could not parse line '{line}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def extract_section(resource: str) -> str:
    """Return the first path segment of a request resource.

    ``/section-a/posts`` gives ``section-a`` and ``/`` gives an empty
    section. The query string is not part of the path.
    """
    path = resource.split('?', 1)[0]
    if path.startswith('/'):
        path = path[1:]
    return path.split('/', 1)[0]


def parse_line(line: str) -> LogEntry:
    """Parse a single Common Log Format line.

    Raises MalformedLine if the line does not match the pattern or one of
    its timestamp, status or size fields cannot be converted.
    """
    match = COMMON_LOG_REGEX.match(line)
    if not match:
        raise MalformedLine(line)

    groups = match.groupdict()

    if not COMMON_LOG_DATE_REGEX.fullmatch(groups['timestamp']):
        raise MalformedLine(line, "bad timestamp: expected DD/Mon/YYYY:HH:MM:SS +ZZZZ")

    try:
        timestamp = datetime.strptime(groups['timestamp'], COMMON_LOG_DATE_FORMAT)
    except ValueError as e:
        raise MalformedLine(line, f"bad timestamp: {e}") from e

    try:
        status = int(groups['status'])
    except ValueError as e:
        raise MalformedLine(line, f"bad status: {e}") from e

    # '-' means the response carried no content
    size = groups['size']
    try:
        size = 0 if size == '-' else int(size)
    except ValueError as e:
        raise MalformedLine(line, f"bad size: {e}") from e

    return LogEntry(
        client_ip=groups['client_ip'],
        user_id=groups['user_id'],
        timestamp=timestamp,
        method=groups['method'],
        section=extract_section(groups['resource']),
        resource=groups['resource'],
        status=status,
        size=size,
    )
