"""Exceptions raised by procmem."""


class ProcmemError(Exception):
    """Base class for procmem errors."""


class ProcessUnavailable(ProcmemError):
    """A process vanished, became a zombie or denied access mid-read."""

    def __init__(self, pid: int, reason: str = "") -> None:
        self.pid = pid
        self.reason = reason
        message = f"process {pid} unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
