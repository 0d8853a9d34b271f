"""Find a process by a substring of its command line."""

import logging
from collections.abc import Iterator

from procmem.errors import ProcessUnavailable
from procmem.models import ProcessMatch
from procmem.source import ProcessTable

logger = logging.getLogger(__name__)


def iter_matching_processes(table: ProcessTable, substring: str) -> Iterator[ProcessMatch]:
    """
    Yield every process whose command line contains ``substring``.

    Candidates are visited in the table's enumeration order. Processes that
    exit or deny access before their command line is read are skipped.
    """
    for pid in table.pids():
        try:
            command_line = table.read_cmdline(pid)
        except ProcessUnavailable as exc:
            logger.debug("Skipping candidate: %s", exc)
            continue

        if substring in command_line:
            yield ProcessMatch(pid=pid, command_line=command_line)


def find_process_by_command_substring(table: ProcessTable, substring: str) -> ProcessMatch | None:
    """Return the first process whose command line contains ``substring``, or None."""
    match = next(iter_matching_processes(table, substring), None)
    if match is None:
        logger.debug("No command line contains %r", substring)
    else:
        logger.info("Matched PID %d: %s", match.pid, match.command_line)
    return match


def find_all_processes_by_command_substring(table: ProcessTable, substring: str) -> list[ProcessMatch]:
    """Return all processes whose command line contains ``substring``."""
    return list(iter_matching_processes(table, substring))
