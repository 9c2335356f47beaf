"""Event model and decoder for ``go test -json`` output.

Each input line is one JSON object such as::

    {"Time":"2024-03-01T10:00:00.123456789Z","Action":"pass",
     "Package":"example.com/pkg","Test":"TestX","Elapsed":0.01}

Lines are decoded independently and any malformed line aborts the run.
"""

from __future__ import annotations

import json
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from gotestreport.errors import DecodeError
from gotestreport.logging import get_logger

logger = get_logger(__name__)

# RFC 3339 as written by Go: optional fraction of up to 9 digits, then Z or offset.
_RFC3339_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})?$"
)


class Action(str, Enum):
    """Kind of a test event, reduced to what aggregation needs."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    OUTPUT = "output"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str) -> "Action":
        """Map a raw Go action (``run``, ``pause``, ``cont``...) to an Action.

        Unknown and lifecycle-only actions become ``OTHER``.
        """
        try:
            return cls(value.lower())
        except ValueError:
            return cls.OTHER

    @property
    def is_terminal(self) -> bool:
        return self in (Action.PASS, Action.FAIL, Action.SKIP)


@dataclass(frozen=True)
class Event:
    """One decoded line of the test log.

    Attributes:
        timestamp: When the event was emitted (timezone-aware).
        action: Reduced action kind.
        package: Go package import path.
        test: Test identifier; empty for package-level events.
        output: Free-text output for ``output`` events.
        elapsed: Seconds elapsed, set on terminal events.
        raw_action: The action string exactly as received.
    """

    timestamp: datetime
    action: Action
    package: str
    test: str = ""
    output: str = ""
    elapsed: float = 0.0
    raw_action: str = ""


def parse_timestamp(value: str) -> datetime:
    """Parse a Go RFC 3339 timestamp.

    Nanosecond fractions are truncated to microseconds. Timestamps without a
    zone are taken as UTC.

    Raises:
        ValueError: If ``value`` is not an RFC 3339 timestamp.
    """
    match = _RFC3339_RE.match(value.strip())
    if match is None:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    text = match.group("base").replace("t", "T").replace(" ", "T")
    frac = match.group("frac")
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    tz = match.group("tz")
    if tz is None or tz in ("Z", "z"):
        text += "+00:00"
    else:
        text += tz

    parsed = datetime.fromisoformat(text)
    if parsed.utcoffset() == timedelta(0):
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _string_field(record: dict, key: str, lineno: Optional[int]) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"field '{key}' must be a string", lineno)
    return value


def decode_event(line: str, lineno: Optional[int] = None) -> Event:
    """Decode a single JSON line into an :class:`Event`.

    Args:
        line: The raw line.
        lineno: 1-based line number used in error messages.

    Raises:
        DecodeError: If the line is not a JSON object, or ``Time`` or
            ``Elapsed`` are missing or invalid.
    """
    try:
        record: Any = json.loads(line)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON: {e.msg}", lineno) from e
    if not isinstance(record, dict):
        raise DecodeError("expected a JSON object", lineno)

    time_value = record.get("Time")
    if not isinstance(time_value, str):
        raise DecodeError("missing or non-string 'Time' field", lineno)
    try:
        timestamp = parse_timestamp(time_value)
    except ValueError as e:
        raise DecodeError(str(e), lineno) from e

    elapsed = record.get("Elapsed", 0.0)
    if elapsed is None:
        elapsed = 0.0
    if isinstance(elapsed, bool) or not isinstance(elapsed, (int, float)):
        raise DecodeError("field 'Elapsed' must be a number", lineno)

    raw_action = _string_field(record, "Action", lineno)
    return Event(
        timestamp=timestamp,
        action=Action.from_string(raw_action),
        package=_string_field(record, "Package", lineno),
        test=_string_field(record, "Test", lineno),
        output=_string_field(record, "Output", lineno),
        elapsed=float(elapsed),
        raw_action=raw_action,
    )


def read_events(lines: Iterable[str]) -> List[Event]:
    """Decode every non-blank line of ``lines``.

    Args:
        lines: Any iterable of text lines (open file, ``sys.stdin``, list).

    Returns:
        Events in input order.

    Raises:
        DecodeError: On the first malformed line, including input that is
            not valid UTF-8.
    """
    events: List[Event] = []
    ignored: Dict[str, int] = {}
    lineno = 0
    iterator = iter(lines)
    while True:
        try:
            line = next(iterator)
        except StopIteration:
            break
        except UnicodeDecodeError as e:
            # Files decode in chunks; this is the first line not yet returned
            raise DecodeError(f"invalid UTF-8 input: {e.reason}", lineno + 1) from e
        lineno += 1
        if not line.strip():
            continue
        event = decode_event(line, lineno)
        if event.action is Action.OTHER:
            ignored[event.raw_action] = ignored.get(event.raw_action, 0) + 1
        events.append(event)

    logger.debug(f"Decoded {len(events)} events")
    if ignored:
        counts = ", ".join(
            f"{action or '<empty>'}={n}" for action, n in sorted(ignored.items())
        )
        logger.debug(f"Lifecycle events not used for aggregation: {counts}")
    return events


def load_events(path: Optional[Path] = None) -> List[Event]:
    """Read events from ``path``, or from standard input when ``path`` is None.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        IsADirectoryError: If ``path`` is a directory.
        DecodeError: On the first malformed line.
    """
    if path is None:
        logger.debug("Reading test events from standard input")
        return read_events(sys.stdin)

    if not path.exists():
        raise FileNotFoundError(f"Test log not found: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"Test log is a directory: {path}")
    logger.debug(f"Reading test events from {path}")
    with open(path, "r", encoding="utf-8") as f:
        return read_events(f)
