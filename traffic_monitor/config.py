"""
Configuration for the traffic monitor.

Intervals are stored in seconds. Zero disables the corresponding
periodic report.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, Field, field_validator

DURATION_UNITS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")


def parse_duration(value: str) -> float:
    """
    Convert a duration string such as ``10s``, ``2m``, ``1m30s`` or
    ``500ms`` into seconds. A bare number is taken as seconds.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    try:
        return float(text)
    except ValueError:
        pass

    seconds = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != pos:
            break
        seconds += float(match.group(1)) * DURATION_UNITS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ValueError(f"invalid duration {value!r}")
    return seconds


class MonitorConfig(BaseModel):
    """Validated settings for one monitoring run."""

    update_interval: float = Field(
        default=10.0,
        ge=0,
        allow_inf_nan=False,
        description="Seconds between busiest-section reports; 0 disables them.",
    )
    high_traffic_interval: float = Field(
        default=120.0,
        ge=0,
        allow_inf_nan=False,
        description="Seconds between high-traffic checks; 0 disables them.",
    )
    high_traffic_threshold: int = Field(
        default=10,
        ge=0,
        description="Hits per high_traffic_interval above which the alert triggers.",
    )

    @field_validator("update_interval", "high_traffic_interval", mode="before")
    @classmethod
    def _coerce_duration(cls, value: Any) -> Any:
        if isinstance(value, timedelta):
            return value.total_seconds()
        if isinstance(value, str):
            return parse_duration(value)
        return value
