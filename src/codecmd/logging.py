"""Diagnostics journal — what the shell itself noticed while running.

This is separate from the command log in ``codecmd.logstore``.  The
command log is user data (every line typed, queryable with ``log``);
the diagnostics journal records the shell's own events: startup, a log
folder that could not be created, day-file writes that failed, searches
launched, shutdown.

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
- **DiagnosticEntry** — a single structured record.
- **Logger** — an append-only journal with filtering.

Only the command-processing thread writes to the journal.  The search
worker never touches it; it reports through its message channel.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for diagnostic entries.

    Using IntEnum means levels compare with ``<`` / ``>`` naturally,
    which makes minimum-level filtering trivial.
    """

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass(frozen=True)
class DiagnosticEntry:
    """A single diagnostic record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The component that reported it (e.g. "logstore").
        timestamp: When it was recorded.

    """

    level: LogLevel
    message: str
    source: str
    timestamp: datetime

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: message``."""
        return f"[{self.level.name}] {self.source}: {self.message}"


class Logger:
    """Append-only diagnostics journal with filtering."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        """Create an empty journal stamped by *clock*."""
        self._clock = clock
        self._entries: list[DiagnosticEntry] = []

    @property
    def entries(self) -> list[DiagnosticEntry]:
        """Return all entries in chronological order."""
        return list(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Component that generated the event.

        """
        self._entries.append(
            DiagnosticEntry(level=level, message=message, source=source, timestamp=self._clock())
        )

    def info(self, message: str, *, source: str) -> None:
        """Append an INFO entry."""
        self.log(LogLevel.INFO, message, source=source)

    def warning(self, message: str, *, source: str) -> None:
        """Append a WARNING entry."""
        self.log(LogLevel.WARNING, message, source=source)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[DiagnosticEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)
