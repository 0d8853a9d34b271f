"""procmem - report the memory usage of a process found by command line."""

__version__ = "0.1.0"
