"""Test doubles shared by the CodeCmd test modules."""

import os
from datetime import datetime, timedelta
from pathlib import Path

from codecmd.config import ShellConfig
from codecmd.errors import OpenFailedError
from codecmd.shell import Shell

START = datetime(2024, 5, 14, 9, 0, 0)


class FakeHost:
    """A host with a hand-driven clock that records side effects."""

    def __init__(self, root: Path | None = None, *, start: datetime = START) -> None:
        """Create a host rooted at *root* whose clock starts at *start*."""
        self.root = root if root is not None else Path()
        self.clock = start
        self.opened: list[str] = []
        self.open_error: str | None = None
        self.denied: set[Path] = set()
        self.exits = 0
        self.restarts = 0
        self.restart_error: OSError | None = None

    def advance(self, **kwargs: float) -> None:
        """Move the clock forward by a ``timedelta(**kwargs)``."""
        self.clock += timedelta(**kwargs)

    def open_file(self, path: str) -> None:
        """Record *path*, or fail with the configured error."""
        if self.open_error is not None:
            raise OpenFailedError(path, self.open_error)
        self.opened.append(path)

    def exit_process(self) -> None:
        """Count exit requests."""
        self.exits += 1

    def restart_process(self) -> None:
        """Count restart requests, or fail with the configured error."""
        self.restarts += 1
        if self.restart_error is not None:
            raise self.restart_error

    def now(self) -> datetime:
        """Return the fake clock."""
        return self.clock

    def cwd(self) -> Path:
        """Return the fake working directory."""
        return self.root

    def list_directories(self, path: Path) -> list[Path]:
        """List real subdirectories, refusing any path in ``denied``."""
        if path in self.denied:
            msg = f"Permission denied: {path}"
            raise PermissionError(msg)
        with os.scandir(path) as it:
            return sorted(Path(e.path) for e in it if e.is_dir())

    def list_files(self, path: Path) -> list[Path]:
        """List real files, refusing any path in ``denied``."""
        if path in self.denied:
            msg = f"Permission denied: {path}"
            raise PermissionError(msg)
        with os.scandir(path) as it:
            return sorted(Path(e.path) for e in it if e.is_file())


def make_shell(tmp_path: Path, *, max_depth: int = 32) -> tuple[FakeHost, Shell]:
    """Create a fake host rooted at *tmp_path* and a shell logging under it."""
    host = FakeHost(tmp_path)
    config = ShellConfig(log_dir=tmp_path / "logs", max_dispatch_depth=max_depth)
    return host, Shell(host=host, config=config)
