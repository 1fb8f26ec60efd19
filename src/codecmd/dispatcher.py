"""Resolver and dispatcher — turn an input line into an executed command.

Resolution order for the command head:

    1. **Alias** — replace the head with its target (one hop only).
    2. **Builtin** — split the arguments and call the handler.
    3. **Custom** — print a trace line, then dispatch the replacement
       line one level deeper.
    4. Otherwise the command is unknown.

Custom commands are macros: ``give greet echo hi`` stores the text
``echo hi`` and re-parses it every time ``greet`` runs.  Because the
text is opaque until then, ``give loop loop`` is legal to define and
can only be caught while running.  The dispatcher expands custom
commands in a loop, counting each re-dispatch, and gives up with
``DispatchRecursionError`` once the count exceeds ``max_depth``.  No
Python frame is added per level, so any limit is safe to configure.

Every ``CommandError`` is rendered at the top-level call as a single
output line; nothing propagates to the caller, so the shell stays
usable after any failure.
"""

from collections.abc import Callable

from codecmd.errors import (
    CommandError,
    DispatchRecursionError,
    HandlerExecutionError,
    UnknownCommandError,
)
from codecmd.registry import Registry
from codecmd.tokenizer import split_args, tokenize

DEFAULT_MAX_DEPTH = 32


class Dispatcher:
    """Resolve command heads against a registry and run them."""

    def __init__(
        self,
        registry: Registry,
        emit: Callable[[str], None],
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Create a dispatcher.

        Args:
            registry: The command tables to resolve against.
            emit: Output sink; receives one line of text per call.
            max_depth: Maximum number of nested custom-command
                re-dispatches allowed for one input line.

        """
        self._registry = registry
        self._emit = emit
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        """Return the custom-command nesting limit."""
        return self._max_depth

    def dispatch(self, line: str, depth: int = 0) -> None:
        """Execute *line*, reporting any command failure as one output line.

        Args:
            line: The raw input line.
            depth: Nesting level; callers outside the dispatcher leave
                this at 0.

        """
        try:
            self._dispatch(line, origin=line, depth=depth)
        except CommandError as e:
            self._emit(str(e))

    def _dispatch(self, line: str, *, origin: str, depth: int) -> None:
        """Resolve and run *line*, raising ``CommandError`` on failure."""
        while True:
            head, rest = tokenize(line)
            if not head:
                return

            name = self._registry.resolve_alias(head)

            if self._registry.is_builtin(name):
                self._run_builtin(name, split_args(rest), origin=origin)
                return
            if not self._registry.is_custom(name):
                raise UnknownCommandError(head)

            replacement = self._registry.custom(name)
            self._emit(f"(custom) {name} → {replacement}")
            depth += 1
            if depth > self._max_depth:
                raise DispatchRecursionError(origin, self._max_depth)
            # The replacement is a whole line, so expansion loops instead of recursing.
            line = replacement

    def _run_builtin(self, name: str, args: list[str], *, origin: str) -> None:
        """Call a builtin handler, wrapping unexpected failures."""
        handler = self._registry.builtin(name)
        try:
            handler(args)
        except CommandError:
            raise
        except Exception as e:  # noqa: BLE001
            raise HandlerExecutionError(origin, e) from e
