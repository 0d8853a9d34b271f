"""Process table access for procmem.

The locator and reporter only see the ``ProcessTable`` protocol: a listing
of pids plus two per-process reads. ``PsutilProcessTable`` backs it with the
live system, ``ProcfsProcessTable`` with any procfs tree and
``InMemoryProcessTable`` with a fixed table for tests and dry runs.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Protocol

import psutil

from procmem.errors import ProcessUnavailable

logger = logging.getLogger(__name__)

DEFAULT_PROCFS_PATH = "/proc"
DEFAULT_CMDLINE_LIMIT = 1023


class ProcessTable(Protocol):
    """Read-only view of the running processes."""

    def pids(self) -> Iterable[int]:
        """Return the current process ids in enumeration order."""
        ...

    def read_cmdline(self, pid: int) -> str:
        """Return the command line of ``pid``; raise ProcessUnavailable."""
        ...

    def read_status(self, pid: int) -> list[str]:
        """Return the status record lines of ``pid``; raise ProcessUnavailable."""
        ...


class ProcfsProcessTable:
    """
    Process table read straight from a procfs tree.

    Lists the numeric entries of ``procfs_path`` and reads the ``cmdline``
    and ``status`` records beneath them, so discovery and memory reads always
    see the same tree. The running procmem process is never listed: its own
    command line holds the search target.
    """

    def __init__(
        self,
        procfs_path: str = DEFAULT_PROCFS_PATH,
        cmdline_limit: int = DEFAULT_CMDLINE_LIMIT,
    ) -> None:
        """
        Initialize the ProcfsProcessTable.

        Args:
            procfs_path: Mount point of the process filesystem.
            cmdline_limit: Maximum number of command line characters kept.
        """
        self._procfs_path = procfs_path
        self._cmdline_limit = cmdline_limit

    @property
    def procfs_path(self) -> str:
        """Get the procfs mount point."""
        return self._procfs_path

    @property
    def cmdline_limit(self) -> int:
        """Get the command line truncation limit."""
        return self._cmdline_limit

    def pids(self) -> list[int]:
        try:
            entries = os.listdir(self._procfs_path)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", self._procfs_path, exc.strerror or exc)
            return []
        # Skips "self", "thread-self" and other non-process entries
        pids = [int(entry) for entry in entries if entry.isascii() and entry.isdigit()]
        return without_self(pids)

    def record_path(self, pid: int, name: str) -> str:
        """Path of the ``name`` record for ``pid``."""
        return os.path.join(self._procfs_path, str(pid), name)

    def status_path(self, pid: int) -> str:
        """Path of the status record for ``pid``."""
        return self.record_path(pid, "status")

    def read_cmdline(self, pid: int) -> str:
        try:
            with open(self.record_path(pid, "cmdline"), "rb") as f:
                raw = f.read()
        except OSError as exc:
            raise ProcessUnavailable(pid, exc.strerror or type(exc).__name__) from exc
        # Arguments are NUL separated, with a trailing NUL
        args = raw.decode("utf-8", errors="replace").rstrip("\0").split("\0")
        return " ".join(args)[: self._cmdline_limit]

    def read_status(self, pid: int) -> list[str]:
        try:
            with open(self.status_path(pid), encoding="utf-8", errors="replace") as f:
                return f.readlines()
        except OSError as exc:
            raise ProcessUnavailable(pid, exc.strerror or type(exc).__name__) from exc


class PsutilProcessTable(ProcfsProcessTable):
    """
    Process table for the live system, backed by psutil.

    Status records come from psutil's own procfs root. Handles NoSuchProcess,
    AccessDenied and ZombieProcess by raising ProcessUnavailable so callers
    can skip the candidate.
    """

    def __init__(self, cmdline_limit: int = DEFAULT_CMDLINE_LIMIT) -> None:
        super().__init__(psutil.PROCFS_PATH, cmdline_limit)

    def pids(self) -> list[int]:
        return without_self(psutil.pids())

    def read_cmdline(self, pid: int) -> str:
        try:
            args = psutil.Process(pid).cmdline()
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as exc:
            # ZombieProcess subclasses NoSuchProcess; report the concrete type
            raise ProcessUnavailable(pid, type(exc).__name__) from exc
        return " ".join(args)[: self._cmdline_limit]


def without_self(pids: Iterable[int]) -> list[int]:
    """Drop the pid of the running process from a listing."""
    own_pid = os.getpid()
    return [pid for pid in pids if pid != own_pid]


def open_process_table(
    procfs_path: str = DEFAULT_PROCFS_PATH,
    cmdline_limit: int = DEFAULT_CMDLINE_LIMIT,
) -> ProcfsProcessTable:
    """Return the psutil table for the live procfs, a direct reader for any other tree."""
    if os.path.abspath(procfs_path) == os.path.abspath(psutil.PROCFS_PATH):
        return PsutilProcessTable(cmdline_limit)
    return ProcfsProcessTable(procfs_path, cmdline_limit)


@dataclass(slots=True, frozen=True)
class FakeProcess:
    """Entry of an in-memory process table."""

    cmdline: str
    status: str | None = None  # None: status record cannot be opened
    gone: bool = False  # exited between enumeration and read


class InMemoryProcessTable:
    """Process table over a fixed mapping, enumerated in insertion order."""

    def __init__(
        self,
        processes: Mapping[int, FakeProcess] | None = None,
        cmdline_limit: int = DEFAULT_CMDLINE_LIMIT,
    ) -> None:
        self._processes: dict[int, FakeProcess] = dict(processes or {})
        self._cmdline_limit = cmdline_limit
        self.status_reads = 0

    def pids(self) -> list[int]:
        return list(self._processes)

    def _lookup(self, pid: int) -> FakeProcess:
        proc = self._processes.get(pid)
        if proc is None or proc.gone:
            raise ProcessUnavailable(pid, "no such process")
        return proc

    def read_cmdline(self, pid: int) -> str:
        return self._lookup(pid).cmdline[: self._cmdline_limit]

    def read_status(self, pid: int) -> list[str]:
        self.status_reads += 1
        proc = self._lookup(pid)
        if proc.status is None:
            raise ProcessUnavailable(pid, "permission denied")
        return proc.status.splitlines(keepends=True)
