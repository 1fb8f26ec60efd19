"""Command log — an append-only, time-stamped record of every input line.

Every line the user submits is recorded here *before* it is dispatched,
so the log captures intent rather than outcome: a mistyped command is
logged just like a successful one.

Two layers:

- **LogStore** — the authoritative in-memory list of ``LogEntry``
  records, queried by inclusive time window for the ``log`` command.
- **DayFileWriter** — a best-effort durable mirror.  Each entry is
  appended as ``[yyyy-mm-dd HH:MM:SS] message`` to
  ``logs_<start-date>.txt``.

Design choices:
    - **One file per run, named by the start date.**  A session that
      runs past midnight keeps writing to the file it opened with.
    - **Write failures are swallowed.**  The in-memory log remains
      correct for the running session; the writer only counts the
      failures so the shell can mention them in its diagnostics.
    - **No re-sorting on query.**  Entries are appended from a single
      thread in clock order, so insertion order already is time order.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

_FILE_TIMESTAMP = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class LogEntry:
    """A single command-log record.

    Attributes:
        timestamp: When the line was submitted.
        message: The input line as typed (trimmed).

    """

    timestamp: datetime
    message: str

    def __str__(self) -> str:
        """Format as ``[HH:MM:SS] message`` for display."""
        return f"[{self.timestamp:%H:%M:%S}] {self.message}"


def format_file_line(timestamp: datetime, message: str) -> str:
    """Format one line of the durable day file."""
    return f"[{timestamp.strftime(_FILE_TIMESTAMP)}] {message}"


class DayFileWriter:
    """Append log lines to the day file for one shell run."""

    def __init__(self, directory: Path, started: datetime) -> None:
        """Create a writer for the run that began at *started*.

        Args:
            directory: The folder that holds day files.
            started: The shell start instant; its date names the file.

        """
        self._path = directory / f"logs_{started:%Y-%m-%d}.txt"
        self._failures = 0

    @property
    def path(self) -> Path:
        """Return the day file path."""
        return self._path

    @property
    def failures(self) -> int:
        """Return how many writes have failed so far."""
        return self._failures

    def ensure(self) -> None:
        """Create the log folder and an empty day file if they are missing.

        Raises:
            OSError: If the folder or file cannot be created.

        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch(exist_ok=True)

    def write(self, timestamp: datetime, message: str) -> bool:
        """Append one line; return False (and count it) if the write failed."""
        try:
            with self._path.open("a", encoding="utf-8") as f:
                f.write(format_file_line(timestamp, message) + "\n")
        except OSError:
            self._failures += 1
            return False
        return True


class LogStore:
    """Append-only in-memory command log with time-window queries."""

    def __init__(
        self,
        clock: Callable[[], datetime],
        writer: DayFileWriter | None = None,
    ) -> None:
        """Create an empty log.

        Args:
            clock: Returns the current instant for each new entry.
            writer: Optional durable mirror for every appended entry.

        """
        self._clock = clock
        self._writer = writer
        self._entries: list[LogEntry] = []

    @property
    def entries(self) -> list[LogEntry]:
        """Return all entries in insertion order."""
        return list(self._entries)

    @property
    def writer(self) -> DayFileWriter | None:
        """Return the durable mirror, if any."""
        return self._writer

    def append(self, message: str) -> LogEntry:
        """Record *message* at the current instant and mirror it to disk.

        Returns:
            The new entry.

        """
        entry = LogEntry(timestamp=self._clock(), message=message)
        self._entries.append(entry)
        if self._writer is not None:
            self._writer.write(entry.timestamp, entry.message)
        return entry

    def query_range(self, start: datetime, end: datetime) -> list[LogEntry]:
        """Return entries with ``start <= timestamp <= end`` in insertion order."""
        return [e for e in self._entries if start <= e.timestamp <= end]

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)
