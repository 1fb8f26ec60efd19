"""Shell configuration.

The defaults work out of the box; a ``codecmd.json`` file in the working
directory can override any of them::

    {
        "log_dir": "logs",
        "max_dispatch_depth": 32,
        "search_root": "/home/me/projects",
        "prompt": "codecmd> "
    }

Missing keys keep their defaults.  Unknown keys are ignored.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from codecmd.dispatcher import DEFAULT_MAX_DEPTH
from codecmd.errors import ConfigError

CONFIG_FILE_NAME = "codecmd.json"


@dataclass(frozen=True)
class ShellConfig:
    """Settings the shell is built from.

    Attributes:
        log_dir: Folder for the per-run day files.
        max_dispatch_depth: Custom-command nesting limit.
        search_root: Where ``search`` starts; None means the working
            directory at the time of the search.
        prompt: The REPL prompt string.

    """

    log_dir: Path = Path("logs")
    max_dispatch_depth: int = DEFAULT_MAX_DEPTH
    search_root: Path | None = None
    prompt: str = "codecmd> "

    def __post_init__(self) -> None:
        """Reject a depth limit that would forbid every custom command."""
        if self.max_dispatch_depth < 1:
            msg = f"max_dispatch_depth must be positive, got {self.max_dispatch_depth}"
            raise ConfigError(msg)


def load_config(path: Path) -> ShellConfig:
    """Load settings from a JSON file.

    Args:
        path: The configuration file.

    Returns:
        The parsed configuration.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.

    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load config {path}: {e}"
        raise ConfigError(msg) from e

    if not isinstance(data, dict):
        msg = f"Config {path} must hold a JSON object"
        raise ConfigError(msg)

    defaults = ShellConfig()
    search_root = data.get("search_root")
    try:
        return ShellConfig(
            log_dir=Path(data.get("log_dir", defaults.log_dir)),
            max_dispatch_depth=int(data.get("max_dispatch_depth", defaults.max_dispatch_depth)),
            search_root=Path(search_root) if search_root is not None else None,
            prompt=str(data.get("prompt", defaults.prompt)),
        )
    except (TypeError, ValueError) as e:
        msg = f"Invalid value in config {path}: {e}"
        raise ConfigError(msg) from e


def find_config(directory: Path) -> ShellConfig:
    """Return the config from *directory*/codecmd.json, or defaults if absent."""
    path = directory / CONFIG_FILE_NAME
    if not path.exists():
        return ShellConfig()
    return load_config(path)
