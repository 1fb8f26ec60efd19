"""Time-range parser for the ``log`` command.

Users scope a log query with a compact syntax:

    ``log``               everything since the shell started
    ``log 13``            today 13:00:00 – 13:59:59 (the whole hour)
    ``log 08:00-21:00``   today 08:00:00 – 21:00:00
    ``log 8-21``          the same, with bare hours

A time token is either a bare hour (``8``, ``08``, ``23``) or a 24-hour
``H:MM`` / ``HH:MM`` literal.  Ranges are combined with the date of
evaluation; no ordering is enforced, so a reversed window just matches
nothing.
"""

import re
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from codecmd.errors import UnparsableTimeError

_HOUR_RE = re.compile(r"\d{1,2}")
_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})")
_HOURS_PER_DAY = 24
_MINUTES_PER_HOUR = 60

# An hour bucket ends one second before the next hour starts.
_HOUR_BUCKET = timedelta(hours=1) - timedelta(seconds=1)


@dataclass(frozen=True)
class TimeRange:
    """An inclusive ``[start, end]`` window of wall-clock instants."""

    start: datetime
    end: datetime

    def __str__(self) -> str:
        """Format as ``[HH:MM - HH:MM]``."""
        return f"[{self.start:%H:%M} - {self.end:%H:%M}]"


def parse_time_token(text: str) -> time:
    """Parse a bare hour or an ``HH:MM`` literal into a time of day.

    Args:
        text: The token, surrounding whitespace allowed.

    Returns:
        The parsed time of day.

    Raises:
        UnparsableTimeError: If *text* is not a valid hour or clock time.

    """
    token = text.strip()
    if _HOUR_RE.fullmatch(token):
        hour = int(token)
        if hour < _HOURS_PER_DAY:
            return time(hour)
        raise UnparsableTimeError(text)

    match = _CLOCK_RE.fullmatch(token)
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour < _HOURS_PER_DAY and minute < _MINUTES_PER_HOUR:
            return time(hour, minute)
    raise UnparsableTimeError(text)


def parse_range(arg: str, *, epoch: datetime, now: datetime) -> TimeRange:
    """Turn the text after ``log`` into a concrete time window.

    Args:
        arg: The raw range expression (may be empty).
        epoch: When the shell started; the lower bound of an empty query.
        now: The evaluation instant; its date anchors every time token.

    Returns:
        The inclusive window to query.

    Raises:
        UnparsableTimeError: If any time token fails to parse.

    """
    if not arg.strip():
        return TimeRange(epoch, now)

    today = now.date()
    if "-" in arg:
        first, second = arg.split("-", 1)
        start = datetime.combine(today, parse_time_token(first), now.tzinfo)
        end = datetime.combine(today, parse_time_token(second), now.tzinfo)
        return TimeRange(start, end)

    start = datetime.combine(today, parse_time_token(arg), now.tzinfo)
    return TimeRange(start, start + _HOUR_BUCKET)
