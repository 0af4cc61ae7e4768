"""Exception types for du-cli."""


class DuError(Exception):
    """Base class for every error raised by du-cli."""


class ConfigurationError(DuError):
    """Bad flag combination or block-size source. Fatal, raised before any traversal."""


class EntryAccessError(DuError):
    """One file or directory could not be stat'ed or listed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"cannot access '{path}': {reason}")
        self.path = path
        self.reason = reason


class TraversalSetupError(EntryAccessError):
    """A top-level argument could not be resolved."""


class UsageError(ConfigurationError):
    """Unknown option or conflicting flags on the command line."""
