"""Read memory metrics from a process status record."""

import logging
from collections.abc import Iterable

from procmem.errors import ProcessUnavailable
from procmem.models import MemoryInfo, MemoryReading, ReadStatus
from procmem.source import ProcessTable

logger = logging.getLogger(__name__)

# Status record key (colon included) -> MemoryInfo field
STATUS_FIELDS = {
    "VmSize:": "vm_size",
    "VmRSS:": "vm_rss",
    "VmData:": "vm_data",
    "VmStk:": "vm_stack",
}

UNIT_SUFFIX = "kB"


def parse_status_line(line: str) -> tuple[str, int] | None:
    """
    Parse a ``<key> <integer> kB`` status line.

    Returns:
        ``(key, value)`` for a well-formed line, otherwise None.
    """
    parts = line.split()
    if len(parts) != 3:
        return None

    key, value, unit = parts
    if unit != UNIT_SUFFIX or not (value.isascii() and value.isdigit()):
        return None
    return key, int(value)


def parse_status_lines(lines: Iterable[str]) -> MemoryReading:
    """Collect the recognized memory fields from status record lines."""
    values: dict[str, int] = {}

    for line in lines:
        parsed = parse_status_line(line)
        if parsed is None:
            continue
        key, value = parsed
        field = STATUS_FIELDS.get(key)
        if field is not None:
            values[field] = value  # last occurrence wins

    status = ReadStatus.OK if values else ReadStatus.NO_FIELDS_PARSED
    return MemoryReading(status=status, info=MemoryInfo(**values))


def read_memory_reading(table: ProcessTable, pid: int) -> MemoryReading:
    """Read the status record of ``pid`` and report how the read went."""
    try:
        lines = table.read_status(pid)
    except ProcessUnavailable as exc:
        logger.debug("Cannot open status record: %s", exc)
        return MemoryReading(status=ReadStatus.NOT_OPENED, info=MemoryInfo())

    reading = parse_status_lines(lines)
    if not reading.ok:
        logger.debug("Status record of PID %d has no memory fields", pid)
    return reading


def read_memory_usage(table: ProcessTable, pid: int) -> MemoryInfo:
    """Return the memory metrics of ``pid``; all zero if the read failed."""
    return read_memory_reading(table, pid).info
