"""Background file search for the ``search`` command.

``search notes.txt`` walks the working directory tree looking for a
file with that exact name (case-insensitive) and opens the first one it
finds.  The walk can take a while on a large tree, so it runs on its own
daemon thread and the prompt stays responsive.

Key ideas:
    - **Explicit stack, not recursion.**  ``walk_directories`` pushes
      subdirectories onto a list and pops them, so a deep tree never
      hits the recursion limit, and a directory that cannot be listed
      (permission denied, vanished mid-walk) only drops that subtree.
    - **First match wins.**  The walk stops at the first hit; any
      further matches are never visited.
    - **Messages, not callbacks.**  The worker never writes to the
      output sink directly.  It posts lines to a ``MessageChannel`` (a
      thread-safe queue) and whoever owns the sink drains it on their
      own thread.
    - **No cancellation.**  Once started, a search runs until it finds
      a match, exhausts the tree, or the process exits.
"""

import queue
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from codecmd.errors import OpenFailedError, SearchMissError
from codecmd.host import Host


class MessageChannel:
    """Thread-safe hand-off of output lines from workers to the sink owner."""

    def __init__(self) -> None:
        """Create an empty channel."""
        self._queue: queue.Queue[str] = queue.Queue()

    def post(self, message: str) -> None:
        """Enqueue *message*; safe to call from any thread."""
        self._queue.put(message)

    def drain(self) -> list[str]:
        """Remove and return every message currently queued, oldest first."""
        messages: list[str] = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages


@dataclass
class SearchOutcome:
    """What one search run found.  Owned and written by its worker thread.

    Attributes:
        target: The file name searched for.
        match: The first matching path, or None.
        opened: True if the host opened the match.
        skipped: Directories that could not be listed.
        done: Set once the walk has finished.

    """

    target: str
    match: Path | None = None
    opened: bool = False
    skipped: list[Path] = field(default_factory=lambda: [])  # noqa: PIE807
    done: threading.Event = field(default_factory=threading.Event)

    def skip(self, directory: Path) -> None:
        """Record *directory* as unreadable, once."""
        if directory not in self.skipped:
            self.skipped.append(directory)


def walk_directories(
    host: Host,
    root: Path,
    on_error: Callable[[Path], None] | None = None,
) -> Iterator[Path]:
    """Yield *root* and every directory below it, depth-first.

    Each directory is yielded before its subdirectories are listed, so
    its own files can still be searched when that listing fails.

    Args:
        host: Supplies directory listings.
        root: Where the walk starts.
        on_error: Called with each directory whose subdirectories could
            not be listed.  Everything below it is skipped.

    """
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        try:
            children = host.list_directories(current)
        except OSError:
            if on_error is not None:
                on_error(current)
            continue
        stack.extend(children)


class SearchWorker:
    """Find a file by name on a background thread and open it."""

    def __init__(self, host: Host, post: Callable[[str], None]) -> None:
        """Create a worker.

        Args:
            host: Supplies the start directory, listings, and ``open_file``.
            post: Thread-safe sink for progress and result lines.

        """
        self._host = host
        self._post = post

    def start(self, target: str) -> tuple[threading.Thread, SearchOutcome]:
        """Launch a search for *target* and return immediately.

        Returns:
            The daemon thread running the search and the outcome it
            fills in.

        """
        outcome = SearchOutcome(target=target)
        root = self._host.cwd()
        thread = threading.Thread(
            target=self.run,
            args=(root, outcome),
            name=f"search-{target}",
            daemon=True,
        )
        thread.start()
        return thread, outcome

    def run(self, root: Path, outcome: SearchOutcome) -> None:
        """Walk from *root*, open the first match, and report the result."""
        try:
            self._search(root, outcome)
        finally:
            outcome.done.set()

    def _search(self, root: Path, outcome: SearchOutcome) -> None:
        wanted = outcome.target.casefold()
        for directory in walk_directories(self._host, root, outcome.skip):
            try:
                files = self._host.list_files(directory)
            except OSError:
                outcome.skip(directory)
                continue
            for path in files:
                if path.name.casefold() == wanted:
                    outcome.match = path
                    self._open(path, outcome)
                    return
        self._post(str(SearchMissError(outcome.target)))

    def _open(self, path: Path, outcome: SearchOutcome) -> None:
        self._post(f"Found: {path}")
        try:
            self._host.open_file(str(path))
        except OpenFailedError as e:
            self._post(f"Open failed: {e.reason}")
            return
        outcome.opened = True
        self._post(f"Opened: {path}")
