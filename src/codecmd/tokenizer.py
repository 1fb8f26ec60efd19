"""Tokenizer: split an input line into a command head and its arguments.

Parsing is intentionally plain.  The head is everything up to the first
run of whitespace; the arguments are the remaining text split on
whitespace.  There is no quoting, escaping or metacharacter handling,
so ``give greet echo "Hello World"`` keeps the quotes as part of the
tokens.
"""


def tokenize(line: str) -> tuple[str, str]:
    """Split *line* into ``(head, rest)`` on the first whitespace run.

    Args:
        line: A raw input line.

    Returns:
        The command head and the unsplit argument text.  ``rest`` is
        ``""`` when the line has no arguments; ``head`` is ``""`` only
        for an empty or whitespace-only line.

    """
    parts = line.split(maxsplit=1)
    if not parts:
        return "", ""
    head = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""
    return head, rest


def split_args(rest: str) -> list[str]:
    """Split argument text on whitespace runs, dropping empty fragments."""
    return rest.split()
