"""Core constants, data model, errors, and config for du-cli."""

from .constants import (
    DEFAULT_BLOCK_SIZE,
    POSIX_BLOCK_SIZE,
    POSIX_ENV_VAR,
    STAT_BLOCK_UNIT,
)
from .errors import (
    DuError,
    ConfigurationError,
    UsageError,
    EntryAccessError,
    TraversalSetupError,
)
from .models import Kind, Mode, LinkPolicy, StatRecord, FileNode, DirNode, Options
from . import config

__all__ = [
    "DEFAULT_BLOCK_SIZE",
    "POSIX_BLOCK_SIZE",
    "POSIX_ENV_VAR",
    "STAT_BLOCK_UNIT",
    "DuError",
    "ConfigurationError",
    "UsageError",
    "EntryAccessError",
    "TraversalSetupError",
    "Kind",
    "Mode",
    "LinkPolicy",
    "StatRecord",
    "FileNode",
    "DirNode",
    "Options",
    "config",
]
