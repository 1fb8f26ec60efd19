"""The shell — wires the command engine to a host and an output sink.

The shell owns one of everything: a registry of builtins, custom
commands and aliases; a dispatcher; the command log and its day file;
the diagnostics journal; and the message channel background searches
report through.  ``execute()`` takes one input line, echoes it, logs
it, dispatches it, and returns the output it produced.

Design choices:
    - **Returns strings, and also feeds a sink.**  ``execute()`` returns
      the lines produced by that call so the shell is testable without
      any UI; a front-end can additionally pass a ``sink`` callable to
      see every line as it is written.
    - **Builtins are a name → method table.**  Adding a command means
      writing a ``_cmd_*`` method and one ``register_builtin`` call.
    - **Log first, then dispatch.**  The command log records what was
      typed, whether or not it worked.
    - **Background output is pulled, not pushed.**  Search workers post
      to ``channel``; the owner of the sink calls ``pump()`` on its own
      thread to move those lines into the output.
"""

from collections.abc import Callable
from datetime import datetime

from codecmd.config import ShellConfig
from codecmd.dispatcher import Dispatcher
from codecmd.errors import OpenFailedError, UnknownTargetError, UnparsableTimeError
from codecmd.host import Host
from codecmd.logging import Logger
from codecmd.logstore import DayFileWriter, LogStore
from codecmd.registry import Registry
from codecmd.search import MessageChannel, SearchOutcome, SearchWorker
from codecmd.timerange import parse_range

_TIMESTAMP = "%Y-%m-%d %H:%M:%S"
_MIN_DEFINITION_ARGS = 2

CLOSING_LOG_LINE = "Program closed."

_HELP_LINES = (
    "Available commands:",
    "  help                           : List all commands with a short description.",
    "  start <fileName>               : Open a file with its registered program.",
    "  log [HH:MM-HH:MM | HH]         : Show logged input since startup or in a time window.",
    "     Example: log                -> everything since the shell started.",
    "     Example: log 08:00-21:00    -> today between 08:00 and 21:00.",
    "     Example: log 13             -> today between 13:00 and 13:59.",
    "  reload                         : Restart the shell.",
    "  exit                           : Quit.",
    "  search <fileName>              : Find a file below the working directory and open it.",
    "  give <name> <command line>     : Define a custom command that runs the command line.",
    "     Example: give greet echo Hello",
    "  assign <existing> <alias>      : Add another name for an existing command.",
    "     Example: assign help llp    -> typing 'llp' runs help.",
)


class Shell:
    """Command interpreter for one shell run."""

    def __init__(
        self,
        *,
        host: Host,
        config: ShellConfig | None = None,
        sink: Callable[[str], None] | None = None,
    ) -> None:
        """Create a shell and open this run's day file.

        Args:
            host: Clock, filesystem and process capabilities.
            config: Settings; defaults are used when omitted.
            sink: Optional callable that receives every output line.

        """
        self._host = host
        self._config = config if config is not None else ShellConfig()
        self._sink = sink
        self._captured: list[str] | None = None
        self._closed = False

        self._started = host.now()
        self._diagnostics = Logger(clock=host.now)
        self._writer = DayFileWriter(self._config.log_dir, self._started)
        try:
            self._writer.ensure()
        except OSError as e:
            self._diagnostics.warning(f"cannot create {self._writer.path}: {e}", source="logstore")
        self._log = LogStore(host.now, self._writer)

        self._registry = Registry()
        self._dispatcher = Dispatcher(
            self._registry, self._write, max_depth=self._config.max_dispatch_depth
        )
        self._channel = MessageChannel()
        self._searcher = SearchWorker(host, self._channel.post)
        self._searches: list[SearchOutcome] = []

        builtins: dict[str, Callable[[list[str]], None]] = {
            "help": self._cmd_help,
            "exit": self._cmd_exit,
            "reload": self._cmd_reload,
            "start": self._cmd_start,
            "log": self._cmd_log,
            "search": self._cmd_search,
            "give": self._cmd_give,
            "assign": self._cmd_assign,
        }
        for name, handler in builtins.items():
            self._registry.register_builtin(name, handler)

        self._diagnostics.info(f"started, logging to {self._writer.path}", source="shell")
        self._write(f"CodeCmd started: {self._started.strftime(_TIMESTAMP)}")

    # -- Accessors ---------------------------------------------------------

    @property
    def registry(self) -> Registry:
        """Return the command registry."""
        return self._registry

    @property
    def log(self) -> LogStore:
        """Return the command log."""
        return self._log

    @property
    def diagnostics(self) -> Logger:
        """Return the diagnostics journal."""
        return self._diagnostics

    @property
    def channel(self) -> MessageChannel:
        """Return the channel background workers post to."""
        return self._channel

    @property
    def started(self) -> datetime:
        """Return the instant the shell started (the log epoch)."""
        return self._started

    @property
    def config(self) -> ShellConfig:
        """Return the active configuration."""
        return self._config

    @property
    def host(self) -> Host:
        """Return the host capabilities."""
        return self._host

    @property
    def command_names(self) -> list[str]:
        """Return every accepted command name (builtins, customs, aliases)."""
        return self._registry.command_names

    @property
    def searches(self) -> list[SearchOutcome]:
        """Return the latest search and any earlier ones still running."""
        return list(self._searches)

    # -- Entry points ------------------------------------------------------

    def execute(self, command: str) -> str:
        """Echo, log and dispatch one input line.

        Args:
            command: The raw input line.

        Returns:
            The output lines produced by this call, newline-joined.
            Empty or whitespace-only input produces ``""`` and is not
            logged.

        """
        stripped = command.strip()
        if not stripped:
            return ""

        captured: list[str] = []
        self._captured = captured
        try:
            self._write(f"> {stripped}")

            failures = self._writer.failures
            self._log.append(stripped)
            if self._writer.failures > failures:
                self._diagnostics.warning(
                    f"could not write to {self._writer.path}", source="logstore"
                )

            self._dispatcher.dispatch(stripped)
        finally:
            self._captured = None
        return "\n".join(captured)

    def pump(self) -> str:
        """Move queued background messages into the output and return them."""
        messages = self._channel.drain()
        for message in messages:
            self._write(message)
        return "\n".join(messages)

    def shutdown(self) -> None:
        """Write the closing lines.  Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        now = self._host.now()
        self._write(f"CodeCmd closing: {now.strftime(_TIMESTAMP)}")
        if not self._writer.write(now, CLOSING_LOG_LINE):
            self._diagnostics.warning(f"could not write to {self._writer.path}", source="logstore")
        self._diagnostics.info("shut down", source="shell")

    def _write(self, text: str) -> None:
        if self._captured is not None:
            self._captured.append(text)
        if self._sink is not None:
            self._sink(text)

    # -- Command handlers --------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> None:
        """List builtins, then any custom commands and aliases."""
        for line in _HELP_LINES:
            self._write(line)
        customs = self._registry.customs
        if customs:
            self._write("  -- Custom commands --")
            for name, replacement in customs:
                self._write(f"     {name} => {replacement}")
        aliases = self._registry.aliases
        if aliases:
            self._write("  -- Aliases --")
            for alias, target in aliases:
                self._write(f"     {alias} => {target}")

    def _cmd_exit(self, _args: list[str]) -> None:
        """Quit the shell."""
        self._write("Exiting...")
        self._host.exit_process()

    def _cmd_reload(self, _args: list[str]) -> None:
        """Close this run and start a fresh process."""
        self._write("Restarting...")
        self.shutdown()
        try:
            self._host.restart_process()
        except OSError:
            # Still running, so the real exit must write its own closing lines.
            self._closed = False
            raise

    def _cmd_start(self, args: list[str]) -> None:
        """Open a file with its default program."""
        if not args:
            self._write("Usage: start <fileName>")
            return
        name = args[0]
        try:
            self._host.open_file(name)
        except OpenFailedError as e:
            self._write(f"Start error: {e.reason}")
            return
        self._write(f"Start: tried to open {name}.")

    def _cmd_log(self, args: list[str]) -> None:
        """Show command-log entries in a time window."""
        now = self._host.now()
        try:
            window = parse_range(" ".join(args), epoch=self._started, now=now)
        except UnparsableTimeError as e:
            self._write(f"{e}. Examples: log 08:00-21:00, log 8-21, log 13")
            return

        entries = self._log.query_range(window.start, window.end)
        if not entries:
            self._write(f"No log entries in {window}.")
            return
        self._write(f"--- {window} log entries ---")
        for entry in entries:
            self._write(str(entry))
        self._write(f"--- Total {len(entries)} entries ---")

    def _cmd_search(self, args: list[str]) -> None:
        """Search the working tree for a file in the background."""
        if not args:
            self._write("Usage: search <fileName>")
            return
        target = args[0]
        self._write(f"Searching for {target} (working directory and subdirectories)")
        self._diagnostics.info(f"search for {target} from {self._host.cwd()}", source="search")
        _thread, outcome = self._searcher.start(target)
        self._searches = [s for s in self._searches if not s.done.is_set()]
        self._searches.append(outcome)

    def _cmd_give(self, args: list[str]) -> None:
        """Define a custom command."""
        if len(args) < _MIN_DEFINITION_ARGS:
            self._write("Usage: give <name> <command line>")
            return
        name = args[0]
        replacement = " ".join(args[1:])
        self._registry.define_custom(name, replacement)
        self._write(f"Custom command added: {name} => {replacement}")

    def _cmd_assign(self, args: list[str]) -> None:
        """Add an alias for an existing builtin or custom command."""
        if len(args) < _MIN_DEFINITION_ARGS:
            self._write("Usage: assign <existing> <alias>")
            return
        existing, alias = args[0], args[1]
        try:
            self._registry.define_alias(alias, existing)
        except UnknownTargetError as e:
            self._write(str(e))
            return
        self._write(f"Alias added: {alias} => {existing}")
