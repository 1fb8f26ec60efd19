"""Command registry — builtins, custom commands, and aliases.

The registry is the single owned aggregate the dispatcher consults.  It
holds three case-insensitive tables:

- **builtins** — name → handler, fixed at startup.
- **customs** — name → replacement command line, created by ``give``.
- **aliases** — name → canonical command name, created by ``assign``.

Design choices:
    - **Keys are folded with ``casefold()``** so ``HELP``, ``Help`` and
      ``help`` are one command.  Custom replacement text keeps its case.
    - **Aliases are validated, customs are not.**  An alias target must
      already be a builtin or custom name, so alias resolution is always
      exactly zero or one hop.  A custom command's replacement text is
      opaque until it runs; cycles are the dispatcher's problem.
    - **No module-level state** — every shell owns a fresh registry, so
      tests never leak commands into each other.
"""

from collections.abc import Callable
from typing import TypeAlias

from codecmd.errors import UnknownTargetError

# A builtin handler receives the split argument list and writes its own output.
Handler: TypeAlias = Callable[[list[str]], None]


def _key(name: str) -> str:
    return name.casefold()


class Registry:
    """Case-insensitive tables of builtins, custom commands, and aliases."""

    def __init__(self) -> None:
        """Create an empty registry."""
        self._builtins: dict[str, Handler] = {}
        self._customs: dict[str, str] = {}
        self._aliases: dict[str, str] = {}

    # -- Mutation ----------------------------------------------------------

    def register_builtin(self, name: str, handler: Handler) -> None:
        """Register *handler* under *name*, replacing any earlier one."""
        self._builtins[_key(name)] = handler

    def define_custom(self, name: str, replacement: str) -> None:
        """Map *name* to the command line *replacement*.

        The replacement is stored verbatim and not checked: it may name
        commands that do not exist yet, or *name* itself.
        """
        self._customs[_key(name)] = replacement

    def define_alias(self, name: str, target: str) -> None:
        """Make *name* an alternate spelling of the command *target*.

        Args:
            name: The new alias.
            target: An existing builtin or custom command name.

        Raises:
            UnknownTargetError: If *target* is not a builtin or custom command.

        """
        canonical = _key(target)
        if canonical not in self._builtins and canonical not in self._customs:
            raise UnknownTargetError(target)
        self._aliases[_key(name)] = canonical

    # -- Lookup ------------------------------------------------------------

    def resolve_alias(self, name: str) -> str:
        """Return the canonical command name for *name* (zero or one hop)."""
        key = _key(name)
        return self._aliases.get(key, key)

    def is_builtin(self, name: str) -> bool:
        """Return True if *name* is a builtin command."""
        return _key(name) in self._builtins

    def is_custom(self, name: str) -> bool:
        """Return True if *name* is a custom command."""
        return _key(name) in self._customs

    def is_alias(self, name: str) -> bool:
        """Return True if *name* is an alias."""
        return _key(name) in self._aliases

    def exists(self, name: str) -> bool:
        """Return True if *name* is a builtin or a custom command."""
        return self.is_builtin(name) or self.is_custom(name)

    def builtin(self, name: str) -> Handler:
        """Return the handler registered for *name*.

        Raises:
            KeyError: If *name* is not a builtin.

        """
        return self._builtins[_key(name)]

    def custom(self, name: str) -> str:
        """Return the replacement line for the custom command *name*.

        Raises:
            KeyError: If *name* is not a custom command.

        """
        return self._customs[_key(name)]

    @property
    def builtin_names(self) -> list[str]:
        """Return builtin names in registration order."""
        return list(self._builtins)

    @property
    def customs(self) -> list[tuple[str, str]]:
        """Return ``(name, replacement)`` pairs in definition order."""
        return list(self._customs.items())

    @property
    def aliases(self) -> list[tuple[str, str]]:
        """Return ``(alias, target)`` pairs in definition order."""
        return list(self._aliases.items())

    @property
    def command_names(self) -> list[str]:
        """Return every name the dispatcher accepts, sorted."""
        return sorted({*self._builtins, *self._customs, *self._aliases})
