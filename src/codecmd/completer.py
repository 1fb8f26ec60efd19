"""Tab completer for the CodeCmd shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)``, which looks at the words
typed so far:

- first word → every builtin, custom command and alias name;
- ``start``/``search`` argument → file names in the working directory;
- ``assign`` first argument → existing builtin and custom names.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from codecmd.shell import Shell

# Commands whose argument is a file name.
_FILE_COMMANDS: frozenset[str] = frozenset(["start", "search"])


class Completer:
    """Context-aware tab completer for the CodeCmd shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer attached to a shell instance.

        Args:
            shell: The shell whose registry and host are used to
                   generate completion candidates.

        """
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        registry = self._shell.registry
        cmd = registry.resolve_alias(words[0])
        position = len(words) if line.endswith(" ") else len(words) - 1

        if cmd in _FILE_COMMANDS and position == 1:
            return self._complete_files(text)
        if cmd == "assign" and position == 1:
            prefix = text.casefold()
            return sorted(
                name
                for name in registry.command_names
                if registry.exists(name) and name.startswith(prefix)
            )
        return []

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the registry."""
        prefix = text.casefold()
        return [cmd for cmd in self._shell.command_names if cmd.startswith(prefix)]

    def _complete_files(self, text: str) -> list[str]:
        """Complete file names in the host's working directory."""
        host = self._shell.host
        try:
            files = host.list_files(host.cwd())
        except OSError:
            return []
        prefix = text.casefold()
        return sorted(p.name for p in files if p.name.casefold().startswith(prefix))
