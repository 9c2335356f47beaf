"""Formatting of run durations and run dates for the report header."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

# English names so the output does not depend on the process locale.
_WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_MONTHS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def format_duration(seconds: float) -> str:
    """Return the total run time as shown in the report header.

    Durations under a minute are fractional seconds with six decimals.
    Longer ones are whole minutes and whole seconds, both truncated: the
    seconds part is re-derived from the fractional minute count.

    Examples:
        45.25 -> "45.250000 s"; 125 -> "2m:5s"; 3600.9 -> "60m:0s".
    """
    if seconds < 60:
        return f"{seconds:f} s"
    total_minutes = seconds / 60
    minutes = int(math.trunc(total_minutes))
    secs = int(math.trunc((total_minutes - minutes) * 60))
    return f"{minutes}m:{secs}s"


def _zone_label(moment: datetime) -> str:
    offset = moment.utcoffset()
    if offset is None:
        return "UTC"
    name = moment.tzname()
    if name and not (name.startswith("UTC") and name != "UTC"):
        return name
    if offset == timedelta(0):
        return "UTC"
    return moment.strftime("%z")


def format_run_date(moment: datetime) -> str:
    """Format ``moment`` in the RFC 850 layout ``Monday, 02-Jan-06 15:04:05 MST``.

    Day and month names are always English. Timestamps carrying only a
    numeric offset show it as ``+hhmm``.
    """
    return (
        f"{_WEEKDAYS[moment.weekday()]}, "
        f"{moment.day:02d}-{_MONTHS[moment.month - 1]}-{moment.year % 100:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} "
        f"{_zone_label(moment)}"
    )
