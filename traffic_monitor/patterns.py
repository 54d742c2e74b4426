"""Traffic Monitor - Constants and patterns"""

VERSION = "1.0.0"

# Common Log Format, optionally followed by Combined Log Format fields
COMMON_LOG_PATTERN = (
    r'^(?P<client_ip>\S+)'
    r' \S+'
    r' (?P<user_id>\S+)'
    r' \[(?P<timestamp>[^\]]+)\]'
    r' "(?P<method>[A-Z]+) (?P<resource>[^ "]*) HTTP/[0-9.]+"'
    r' (?P<status>[0-9]{3})'
    r' (?P<size>[0-9]+|-)'
)

COMMON_LOG_DATE_FORMAT = "%d/%b/%Y:%H:%M:%S %z"

# strptime alone accepts one-digit fields, "Z" and "+00:00"
COMMON_LOG_DATE_PATTERN = r"[0-9]{2}/[A-Z][a-z]{2}/[0-9]{4}:[0-9]{2}:[0-9]{2}:[0-9]{2} [+-][0-9]{4}"

# Report templates
NO_HITS_MESSAGE = "no hits to server"
BUSIEST_SECTIONS_MESSAGE = "busiest sections: {sections} ({rate:.2f} hits per second)"
HIGH_TRAFFIC_MESSAGE = "WARNING: high traffic of {rate:.2f} hits per second, triggered at {time}"
HIGH_TRAFFIC_RESOLVED_MESSAGE = "WARNING: high traffic condition resolved at {time}"
MALFORMED_LINE_MESSAGE = "WARNING: {error}"
