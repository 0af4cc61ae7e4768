"""Block-size and command-line constants for du-cli."""

import pathlib

HOME = str(pathlib.Path.home())

PROG = "du"
USAGE = "usage: du [-H | -L | -P] [-a | -s] [-ckrx] [file ...]"

# Reporting block sizes
DEFAULT_BLOCK_SIZE = 1024
POSIX_BLOCK_SIZE = 512
MAX_BLOCK_SIZE = 1024 * 1024

# Present (any value) -> POSIX 512-byte default
POSIX_ENV_VAR = "POSIXLY_CORRECT"

# Unit of st_blocks on POSIX systems (S_BLKSIZE)
STAT_BLOCK_UNIT = 512

CONFIG_PATHS = [
    f"{HOME}/.durc",
    f"{HOME}/.config/du-cli/config.json",
]

EXIT_OK = 0
EXIT_FAILURE = 1
