"""procmem - command line entry point."""

import logging
import sys
from collections.abc import Sequence

from procmem.config import Settings
from procmem.display import format_match, format_memory
from procmem.locator import find_all_processes_by_command_substring, find_process_by_command_substring
from procmem.models import MemoryInfo
from procmem.reporter import read_memory_reading
from procmem.source import ProcessTable, open_process_table

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout only carries the report."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
    )


def show_report(pid: int, command_line: str, info: MemoryInfo) -> None:
    """Run the terminal UI for an already-read report."""
    # Imported lazily: textual is only needed for --tui
    from procmem.app import MemoryReportApp

    MemoryReportApp(pid, command_line, info).run()


def list_matches(table: ProcessTable, target: str) -> int:
    matches = find_all_processes_by_command_substring(table, target)
    if not matches:
        print(f"Process not found: no command line contains {target!r}")
        return EXIT_FAILURE

    for match in matches:
        print(format_match(match))
    return EXIT_OK


def main(argv: Sequence[str] | None = None, table: ProcessTable | None = None) -> int:
    """
    Locate the target process and print its memory usage.

    Args:
        argv: Command line arguments, ``sys.argv[1:]`` when None.
        table: Process table to read; the live system when None.

    Returns:
        Process exit status.
    """
    settings = Settings.from_args(argv)
    setup_logging(settings.verbose)

    if table is None:
        table = open_process_table(settings.procfs_path, settings.cmdline_limit)

    if settings.list_only:
        return list_matches(table, settings.target)

    match = find_process_by_command_substring(table, settings.target)
    if match is None:
        print(f"Process not found: no command line contains {settings.target!r}")
        return EXIT_FAILURE

    print(f"Found process matching {settings.target!r}: PID {match.pid}")

    reading = read_memory_reading(table, match.pid)
    # A zero virtual size is treated as a failed read as well
    if not reading.ok or reading.info.vm_size == 0:
        logger.warning("Status read for PID %d ended with %s", match.pid, reading.status.value)
        print(f"Failed to read memory information for PID {match.pid}")
        return EXIT_FAILURE

    if settings.tui:
        show_report(match.pid, match.command_line, reading.info)
    else:
        print(format_memory(reading.info))
    return EXIT_OK


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
