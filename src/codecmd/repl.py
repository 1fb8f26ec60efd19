"""Interactive REPL (Read-Eval-Print Loop) for CodeCmd.

The REPL is the thin terminal front-end around the shell:

    1. **Read** — display a prompt and read one line.
    2. **Eval** — pass it to ``shell.execute()``.
    3. **Print** — the shell writes every output line to ``print``.
    4. **Loop** — until ``exit``, Ctrl+D or Ctrl+C.

Background search results are pulled from the shell's message channel
(``shell.pump()``) on this thread, before each prompt and after each
command, so only the REPL thread ever writes to the terminal.

The helper functions (``format_banner``, ``build_shell``) are pure and
testable.  The ``run()`` function is the I/O entrypoint.
"""

import readline
import sys
from pathlib import Path

from codecmd.completer import Completer
from codecmd.config import ShellConfig, find_config
from codecmd.errors import ConfigError
from codecmd.host import Host, SystemHost
from codecmd.shell import Shell

_BANNER_WIDTH = 38


def format_banner() -> str:
    """Return the startup banner."""
    border = "=" * _BANNER_WIDTH
    return (
        f"  {border}\n               CodeCmd\n      Type 'help' for commands.\n  {border}"
    )


def build_shell(config: ShellConfig, host: Host | None = None) -> Shell:
    """Create a shell that prints its output, with a host rooted per *config*."""
    if host is None:
        host = SystemHost(root=config.search_root)
    return Shell(host=host, config=config, sink=print)


def run() -> None:
    """Run the interactive REPL.

    This is the ``codecmd`` console entry point.  It handles:
    - Loading ``codecmd.json`` from the working directory.
    - Tab completion via readline.
    - Graceful handling of ``exit``, Ctrl+C and Ctrl+D.
    - Writing the closing log line on the way out.
    """
    try:
        config = find_config(Path.cwd())
    except ConfigError as e:
        print(f"codecmd: {e}", file=sys.stderr)  # noqa: T201
        raise SystemExit(1) from e

    print(format_banner())  # noqa: T201
    shell = build_shell(config)

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    try:
        while True:
            shell.pump()
            try:
                command = input(config.prompt)
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break
            shell.execute(command)
            shell.pump()
    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201
    finally:
        shell.shutdown()
