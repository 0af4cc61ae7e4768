#!/usr/bin/env python3
"""Command-line interface for du-cli."""
import argparse
import logging
import os
import sys

from rich.console import Console
from rich.markup import escape

from .core import config as config_module
from .core.constants import EXIT_FAILURE, EXIT_OK, PROG, USAGE
from .core.errors import ConfigurationError, UsageError
from .core.models import LinkPolicy
from .services.aggregate_service import DiskUsageSession

err_console = Console(stderr=True, highlight=False)


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = _Parser(prog=PROG, usage=USAGE[len("usage: "):], add_help=False,
                     description="Display disk usage statistics.")
    parser.add_argument("--help", action="help", help="Show this help message and exit.")
    parser.add_argument("-H", dest="link_policy", action="store_const", const=LinkPolicy.COMMAND_LINE,
                        help="Follow symbolic links named on the command line.")
    parser.add_argument("-L", dest="link_policy", action="store_const", const=LinkPolicy.LOGICAL,
                        help="Follow all symbolic links.")
    parser.add_argument("-P", dest="link_policy", action="store_const", const=LinkPolicy.PHYSICAL,
                        help="Do not follow symbolic links (default).")
    parser.add_argument("-a", action="store_true", help="Display an entry for each file.")
    parser.add_argument("-s", action="store_true", help="Display only a total for each argument.")
    parser.add_argument("-c", action="store_true", help="Display a grand total.")
    parser.add_argument("-k", action="store_true", help="Use 1024-byte blocks.")
    parser.add_argument("-r", action="store_true",
                        help="Accepted for compatibility; unreadable entries are always reported.")
    parser.add_argument("-x", action="store_true", help="Do not cross filesystem boundaries.")
    parser.add_argument("--debug", action="store_true", help="Log debug diagnostics to stderr.")
    parser.add_argument("files", nargs="*", help="Files or directories to process (default: .).")
    return parser


class ConsoleLogHandler(logging.Handler):
    """One unwrapped stderr line per record, printed through the rich console."""

    STYLES = {logging.ERROR: "red", logging.WARNING: "yellow"}

    def __init__(self, console: Console = err_console):
        super().__init__()
        self.console = console

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.console.print(self.format(record), style=self.STYLES.get(record.levelno),
                               soft_wrap=True, markup=False, highlight=False, emoji=False)
        except Exception:
            self.handleError(record)


def setup_logging(debug: bool = False) -> None:
    """Route du_cli log records to stderr through rich."""
    handler = ConsoleLogHandler()
    handler.setFormatter(logging.Formatter(f"{PROG}: %(message)s"))
    log = logging.getLogger("du_cli")
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if debug else logging.WARNING)
    log.propagate = False


def _usage_error() -> int:
    err_console.print(f"[red]{escape(USAGE)}[/]", soft_wrap=True)
    return EXIT_FAILURE


def _discard_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush stays quiet."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def run(argv=None, env=None) -> int:
    """Run du and return the exit status."""
    argv = argv if argv is not None else sys.argv[1:]
    env = env if env is not None else os.environ
    try:
        args = build_parser().parse_args(argv)
    except UsageError:
        return _usage_error()
    setup_logging(args.debug)

    try:
        options = config_module.build_options(args, env, config_module.load())
        session = DiskUsageSession(options)
    except UsageError:
        return _usage_error()
    except ConfigurationError as e:
        err_console.print(f"[red]{escape(PROG)}: {escape(str(e))}[/]", soft_wrap=True)
        return EXIT_FAILURE

    try:
        session.run()
        sys.stdout.flush()
    except BrokenPipeError:
        _discard_stdout()
        return EXIT_FAILURE
    if session.failed_arguments:
        return EXIT_FAILURE
    return EXIT_OK


def main(argv=None):
    """Main function."""
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
