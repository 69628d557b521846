# ABOUTME: DAISY v3 clock value parsing, formatting and duration arithmetic.
# ABOUTME: Unparsable or out-of-range clock strings count as zero milliseconds.

import re
from datetime import datetime, timedelta, timezone

# "0:50:27.083", "40:08:40": unbounded hours, two-digit minutes/seconds,
# optional three-digit milliseconds.
_CLOCK_RE = re.compile(r"(\d+):(\d{2}):(\d{2})(?:\.(\d{3}))?", re.ASCII)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_time(time_str: str) -> int:
    """Convert a DAISY clock value to total milliseconds.

    Returns 0 for the empty string, for anything not shaped like
    ``H:mm:ss[.SSS]``, and when minutes or seconds are 60 or more. A zero
    result therefore does not tell a malformed value from a real zero.
    """
    if not time_str:
        return 0

    match = _CLOCK_RE.fullmatch(time_str)
    if not match:
        return 0

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3))
    milliseconds = int(match.group(4)) if match.group(4) else 0

    if minutes >= 60 or seconds >= 60 or milliseconds >= 1000:
        return 0

    return (hours * 3600 + minutes * 60 + seconds) * 1000 + milliseconds


def format_time(milliseconds: int) -> str:
    """Render milliseconds as ``HH:mm:ss.SSS`` (hours grow past two digits).

    Raises:
        ValueError: If ``milliseconds`` is negative.
    """
    total = int(milliseconds)
    if total < 0:
        msg = f"milliseconds must be non-negative, got {milliseconds}"
        raise ValueError(msg)

    seconds, millis = divmod(total, 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def format_time_iso(milliseconds: int) -> str:
    """Render milliseconds as an ISO 8601 UTC timestamp offset from the Unix epoch."""
    moment = _EPOCH + timedelta(milliseconds=milliseconds)
    return moment.isoformat(timespec="milliseconds")


def calculate_duration(start_time: str, end_time: str) -> int:
    """Milliseconds from ``start_time`` to ``end_time``, never negative."""
    return max(0, parse_time(end_time) - parse_time(start_time))
