"""Tests for the resolver/dispatcher.

The dispatcher resolves aliases (one hop), runs builtins, re-dispatches
custom commands with a depth limit, and renders every failure as a
single output line.
"""

import sys

from codecmd.dispatcher import DEFAULT_MAX_DEPTH, Dispatcher
from codecmd.errors import UnparsableTimeError
from codecmd.registry import Registry


def _dispatcher(*, max_depth: int = DEFAULT_MAX_DEPTH) -> tuple[Registry, Dispatcher, list[str]]:
    """Create a registry with ``echo`` and ``boom`` builtins, and a dispatcher."""
    output: list[str] = []
    registry = Registry()

    def echo(args: list[str]) -> None:
        output.append(" ".join(args))

    def boom(_args: list[str]) -> None:
        msg = "kaboom"
        raise ValueError(msg)

    def badtime(_args: list[str]) -> None:
        raise UnparsableTimeError("25")

    registry.register_builtin("echo", echo)
    registry.register_builtin("boom", boom)
    registry.register_builtin("badtime", badtime)
    return registry, Dispatcher(registry, output.append, max_depth=max_depth), output


def _run(line: str, setup: list[str] | None = None) -> list[str]:
    """Dispatch *setup* lines then *line*; return the output of *line* only."""
    registry, dispatcher, output = _dispatcher()
    for definition in setup or []:
        name, replacement = definition.split(" ", 1)
        registry.define_custom(name, replacement)
    dispatcher.dispatch(line)
    return output


class TestBuiltinDispatch:
    """Verify builtin resolution and argument passing."""

    def test_empty_line_is_noop(self) -> None:
        """Blank input produces nothing."""
        assert _run("   ") == []

    def test_builtin_receives_split_args(self) -> None:
        """Arguments are split on whitespace runs."""
        assert _run("echo  a   b") == ["a b"]

    def test_head_is_case_insensitive(self) -> None:
        """``ECHO`` runs the ``echo`` builtin."""
        assert _run("ECHO hi") == ["hi"]

    def test_unknown_command(self) -> None:
        """An unrecognised head is reported by name."""
        assert _run("frobnicate now") == ["Unknown command: frobnicate"]


class TestHandlerErrors:
    """Verify failures inside builtins are contained."""

    def test_unexpected_exception_reported(self) -> None:
        """A crash in a handler becomes one execution-error line."""
        output = _run("boom now")
        assert len(output) == 1
        assert "Command execution error" in output[0]
        assert "boom now" in output[0]
        assert "kaboom" in output[0]

    def test_command_error_keeps_its_message(self) -> None:
        """A CommandError raised by a handler is shown as-is."""
        assert _run("badtime") == ["Cannot parse time: '25'"]

    def test_shell_usable_after_failure(self) -> None:
        """A failed command does not affect the next one."""
        _registry, dispatcher, output = _dispatcher()
        dispatcher.dispatch("boom")
        dispatcher.dispatch("echo still here")
        assert output[-1] == "still here"

    def test_error_attributed_to_original_line(self) -> None:
        """A crash inside a custom command names the line the user typed."""
        output = _run("kaput", ["kaput boom"])
        assert "'kaput'" in output[-1]


class TestAliases:
    """Verify alias indirection."""

    def test_alias_behaves_like_target(self) -> None:
        """An alias produces the same output as its builtin."""
        registry, dispatcher, output = _dispatcher()
        registry.define_alias("say", "echo")
        dispatcher.dispatch("say hello there")
        dispatcher.dispatch("echo hello there")
        assert output == ["hello there", "hello there"]

    def test_alias_to_custom(self) -> None:
        """An alias to a custom command runs the macro."""
        registry, dispatcher, output = _dispatcher()
        registry.define_custom("greet", "echo hi")
        registry.define_alias("g", "greet")
        dispatcher.dispatch("g")
        assert output == ["(custom) greet → echo hi", "hi"]


class TestCustomCommands:
    """Verify macro re-dispatch and the depth guard."""

    def test_trace_then_effect(self) -> None:
        """A custom command prints a trace line, then runs its replacement."""
        output = _run("greet", ["greet echo Hello World"])
        assert output == ["(custom) greet → echo Hello World", "Hello World"]

    def test_arguments_after_custom_are_ignored(self) -> None:
        """Only the stored replacement line runs."""
        output = _run("greet extra words", ["greet echo hi"])
        assert output[-1] == "hi"

    def test_unknown_target_reported_at_run_time(self) -> None:
        """A macro naming a missing command fails only when run."""
        output = _run("greet", ["greet shout Hello"])
        assert output == ["(custom) greet → shout Hello", "Unknown command: shout"]

    def test_chained_customs(self) -> None:
        """A custom command may run another custom command."""
        output = _run("outer", ["outer inner", "inner echo deep"])
        assert output == ["(custom) outer → inner", "(custom) inner → echo deep", "deep"]

    def test_self_reference_hits_depth_limit(self) -> None:
        """``give loop loop`` fails with a recursion error instead of hanging."""
        output = _run("loop", ["loop loop"])
        assert "nesting exceeded" in output[-1]
        assert "'loop'" in output[-1]
        assert output.count("(custom) loop → loop") == DEFAULT_MAX_DEPTH + 1

    def test_mutual_recursion_hits_depth_limit(self) -> None:
        """Two macros calling each other are stopped too."""
        output = _run("ping", ["ping pong", "pong ping"])
        assert "nesting exceeded" in output[-1]

    def test_depth_limit_is_configurable(self) -> None:
        """A small limit stops a short chain."""
        registry, dispatcher, output = _dispatcher(max_depth=1)
        registry.define_custom("a", "b")
        registry.define_custom("b", "echo ok")
        dispatcher.dispatch("a")
        assert "nesting exceeded 1 levels" in output[-1]

    def test_chain_within_limit_runs(self) -> None:
        """A chain exactly at the limit still runs."""
        registry, dispatcher, output = _dispatcher(max_depth=2)
        registry.define_custom("a", "b")
        registry.define_custom("b", "echo ok")
        dispatcher.dispatch("a")
        assert output[-1] == "ok"

    def test_limit_above_python_recursion_limit(self) -> None:
        """A limit deeper than the interpreter stack still ends in a reported error."""
        limit = sys.getrecursionlimit() * 5
        registry, dispatcher, output = _dispatcher(max_depth=limit)
        registry.define_custom("loop", "loop")
        dispatcher.dispatch("loop")
        assert output[-1].startswith(f"Error: custom command nesting exceeded {limit} levels")
        assert output.count("(custom) loop → loop") == limit + 1

    def test_long_chain_within_large_limit_runs(self) -> None:
        """A chain longer than the interpreter stack runs to its builtin."""
        length = sys.getrecursionlimit() * 2
        registry, dispatcher, output = _dispatcher(max_depth=length)
        for i in range(length - 1):
            registry.define_custom(f"c{i}", f"c{i + 1}")
        registry.define_custom(f"c{length - 1}", "echo bottom")
        dispatcher.dispatch("c0")
        assert output[-1] == "bottom"

    def test_builtin_shadows_custom(self) -> None:
        """Builtins take precedence over customs with the same name."""
        output = _run("echo hi", ["echo boom"])
        assert output == ["hi"]
