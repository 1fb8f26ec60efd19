"""Error taxonomy for the command shell.

Every failure a user can trigger is a ``CommandError``.  The dispatcher
catches them at its top-level boundary and renders each one as a single
output line (``str(error)``), so the messages below are written for the
person at the prompt, not for a traceback.

Two failure kinds are *not* exceptions here: a directory that cannot
be listed during a search, and a log line that cannot be written to the
day file.  Both surface as ``OSError`` from the host or the filesystem
and are swallowed where they occur.
"""


class CommandError(Exception):
    """Base class for every user-facing command failure."""


class UnknownCommandError(CommandError):
    """Raised when a command head matches no alias, builtin or custom command."""

    def __init__(self, name: str) -> None:
        """Record the unrecognised command *name*."""
        super().__init__(f"Unknown command: {name}")
        self.name = name


class UnknownTargetError(CommandError):
    """Raised when an alias points at a command that does not exist."""

    def __init__(self, target: str) -> None:
        """Record the missing alias *target*."""
        super().__init__(f"Unknown command to alias: {target}")
        self.target = target


class UnparsableTimeError(CommandError):
    """Raised when a ``log`` time token is neither ``H`` nor ``HH:MM``."""

    def __init__(self, text: str) -> None:
        """Record the offending *text*."""
        super().__init__(f"Cannot parse time: {text!r}")
        self.text = text


class DispatchRecursionError(CommandError):
    """Raised when custom commands re-dispatch deeper than the limit.

    Custom commands may reference each other (or themselves), so a
    cycle can only be detected while running.  The depth limit turns
    such a cycle into a reported error instead of a hang.
    """

    def __init__(self, line: str, limit: int) -> None:
        """Record the original *line* and the depth *limit* it hit."""
        msg = f"Error: custom command nesting exceeded {limit} levels while running '{line}'"
        super().__init__(msg)
        self.line = line
        self.limit = limit


class HandlerExecutionError(CommandError):
    """Wrap an unexpected exception raised inside a builtin handler."""

    def __init__(self, line: str, cause: BaseException) -> None:
        """Attribute *cause* to the original input *line*."""
        super().__init__(f"Command execution error in '{line}': {cause}")
        self.line = line
        self.cause = cause


class OpenFailedError(CommandError):
    """Raised by the host when a file cannot be handed to its default program."""

    def __init__(self, path: str, reason: str) -> None:
        """Record the *path* and a human-readable *reason*."""
        super().__init__(reason)
        self.path = path
        self.reason = reason


class SearchMissError(CommandError):
    """A file search walked the whole tree without a match."""

    def __init__(self, target: str) -> None:
        """Record the file name that was not found."""
        super().__init__(f"File not found: {target}")
        self.target = target


class ConfigError(RuntimeError):
    """Raise when the shell configuration file cannot be used.

    Examples: unreadable file, invalid JSON, a non-positive depth limit.
    """
