"""Host capabilities — everything the shell needs from the outside world.

The shell core never opens files, exits, reads the clock or lists
directories by itself.  It asks a **Host** for each of those, which
keeps the core deterministic under test: a fake host supplies a fixed
clock, a scratch directory, and records which files were "opened".

Why a Protocol instead of an ABC?
    Structural typing — a test double only needs the right methods,
    not a base class.
"""

import os
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import Protocol

from codecmd.errors import OpenFailedError


class Host(Protocol):
    """Interface every host environment must satisfy."""

    def open_file(self, path: str) -> None:
        """Hand *path* to the system's default program.

        Raises:
            OpenFailedError: If the file cannot be opened.

        """
        ...  # pragma: no cover

    def exit_process(self) -> None:
        """Terminate the shell process."""
        ...  # pragma: no cover

    def restart_process(self) -> None:
        """Replace the shell process with a fresh one."""
        ...  # pragma: no cover

    def now(self) -> datetime:
        """Return the current wall-clock instant."""
        ...  # pragma: no cover

    def cwd(self) -> Path:
        """Return the working directory searches start from."""
        ...  # pragma: no cover

    def list_directories(self, path: Path) -> list[Path]:
        """Return the immediate subdirectories of *path*.

        Raises:
            OSError: If *path* cannot be listed.

        """
        ...  # pragma: no cover

    def list_files(self, path: Path) -> list[Path]:
        """Return the regular files directly inside *path*.

        Raises:
            OSError: If *path* cannot be listed.

        """
        ...  # pragma: no cover


class SystemHost:
    """The real operating system."""

    def __init__(self, *, root: Path | None = None) -> None:
        """Create a host; *root* overrides the process working directory."""
        self._root = root

    def open_file(self, path: str) -> None:
        """Open *path* with its associated program (start/xdg-open/open)."""
        try:
            if sys.platform == "win32":
                os.startfile(path)  # noqa: S606  # pyright: ignore[reportAttributeAccessIssue]
                return
            if not Path(path).exists():
                msg = f"No such file: {path}"
                raise OpenFailedError(path, msg)
            opener = "open" if sys.platform == "darwin" else "xdg-open"
            subprocess.Popen(  # noqa: S603
                [opener, path],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise OpenFailedError(path, str(e)) from e

    def exit_process(self) -> None:
        """Leave the REPL by raising SystemExit."""
        raise SystemExit(0)

    def restart_process(self) -> None:
        """Re-exec the current interpreter with the same arguments."""
        os.execv(sys.executable, [sys.executable, *sys.argv])  # noqa: S606

    def now(self) -> datetime:
        """Return the local time."""
        return datetime.now()  # noqa: DTZ005

    def cwd(self) -> Path:
        """Return the configured root or the process working directory."""
        return self._root if self._root is not None else Path.cwd()

    def list_directories(self, path: Path) -> list[Path]:
        """List subdirectories, not following symlinks."""
        with os.scandir(path) as it:
            return [Path(e.path) for e in it if e.is_dir(follow_symlinks=False)]

    def list_files(self, path: Path) -> list[Path]:
        """List regular files."""
        with os.scandir(path) as it:
            return [Path(e.path) for e in it if e.is_file()]
