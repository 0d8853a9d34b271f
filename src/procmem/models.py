"""Data models for procmem."""

from dataclasses import dataclass
from enum import Enum


@dataclass(slots=True, frozen=True)
class MemoryInfo:
    """Immutable memory metrics of a process, all in kilobytes."""

    vm_size: int = 0  # VmSize
    vm_rss: int = 0  # VmRSS
    vm_data: int = 0  # VmData
    vm_stack: int = 0  # VmStk


@dataclass(slots=True, frozen=True)
class ProcessMatch:
    """A process whose command line matched the search substring."""

    pid: int
    command_line: str


class ReadStatus(Enum):
    """Outcome of reading a process status record."""

    OK = "ok"
    NOT_OPENED = "not_opened"
    NO_FIELDS_PARSED = "no_fields_parsed"


@dataclass(slots=True, frozen=True)
class MemoryReading:
    """Result of a status read: the outcome plus whatever was parsed."""

    status: ReadStatus
    info: MemoryInfo

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK
