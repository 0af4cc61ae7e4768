"""du-cli package: disk usage per file and directory subtree."""

__version__ = "1.0.0"

from . import utils
from . import core
from . import services

__all__ = ["cli", "core", "utils", "services"]
