"""Command line configuration for procmem."""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

from procmem import __version__
from procmem.source import DEFAULT_CMDLINE_LIMIT, DEFAULT_PROCFS_PATH

DEFAULT_TARGET = "node"


@dataclass(slots=True, frozen=True)
class Settings:
    """Immutable run settings."""

    target: str = DEFAULT_TARGET
    procfs_path: str = DEFAULT_PROCFS_PATH
    cmdline_limit: int = DEFAULT_CMDLINE_LIMIT
    verbose: bool = False
    tui: bool = False
    list_only: bool = False

    @classmethod
    def from_args(cls, argv: Sequence[str] | None = None) -> "Settings":
        """
        Parse command line arguments into Settings.

        Invalid values exit with status 2 through ``parser.error``.
        """
        parser = build_parser()
        args = parser.parse_args(argv)

        if not args.target:
            parser.error("target substring must not be empty")
        if args.cmdline_limit <= 0:
            parser.error("--cmdline-limit must be positive")
        if args.tui and args.list_only:
            parser.error("--tui and --list cannot be combined")

        return cls(
            target=args.target,
            procfs_path=args.procfs_path,
            cmdline_limit=args.cmdline_limit,
            verbose=args.verbose,
            tui=args.tui,
            list_only=args.list_only,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procmem",
        description="Report the memory usage of the first process whose command line contains TARGET.",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=DEFAULT_TARGET,
        help=f"command line substring to search for, case-sensitive (default: {DEFAULT_TARGET})",
    )
    parser.add_argument(
        "--procfs",
        dest="procfs_path",
        default=DEFAULT_PROCFS_PATH,
        help=f"process filesystem mount point (default: {DEFAULT_PROCFS_PATH})",
    )
    parser.add_argument(
        "--cmdline-limit",
        type=int,
        default=DEFAULT_CMDLINE_LIMIT,
        help="characters of each command line searched (default: %(default)s)",
    )
    parser.add_argument(
        "--list",
        dest="list_only",
        action="store_true",
        help="list every matching process instead of reporting memory",
    )
    parser.add_argument("--tui", action="store_true", help="show the report in a terminal UI")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser
