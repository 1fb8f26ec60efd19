"""CodeCmd — an interactive command shell with macros, aliases, and an input log.

Re-exports the engine so callers can write::

    from codecmd import Shell, Registry, Dispatcher
"""

from codecmd.config import ShellConfig, load_config
from codecmd.dispatcher import DEFAULT_MAX_DEPTH, Dispatcher
from codecmd.errors import (
    CommandError,
    ConfigError,
    DispatchRecursionError,
    HandlerExecutionError,
    OpenFailedError,
    SearchMissError,
    UnknownCommandError,
    UnknownTargetError,
    UnparsableTimeError,
)
from codecmd.host import Host, SystemHost
from codecmd.logstore import DayFileWriter, LogEntry, LogStore
from codecmd.registry import Registry
from codecmd.search import MessageChannel, SearchWorker
from codecmd.shell import Shell
from codecmd.timerange import TimeRange, parse_range, parse_time_token
from codecmd.tokenizer import split_args, tokenize

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "CommandError",
    "ConfigError",
    "DayFileWriter",
    "DispatchRecursionError",
    "Dispatcher",
    "HandlerExecutionError",
    "Host",
    "LogEntry",
    "LogStore",
    "MessageChannel",
    "OpenFailedError",
    "Registry",
    "SearchMissError",
    "SearchWorker",
    "Shell",
    "ShellConfig",
    "SystemHost",
    "TimeRange",
    "UnknownCommandError",
    "UnknownTargetError",
    "UnparsableTimeError",
    "load_config",
    "parse_range",
    "parse_time_token",
    "split_args",
    "tokenize",
]
