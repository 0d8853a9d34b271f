"""Shared fixtures for procmem tests."""

import pytest

from procmem.source import FakeProcess, InMemoryProcessTable

NODE_STATUS = """\
Name:\tnode
Umask:\t0022
State:\tS (sleeping)
Pid:\t4242
VmPeak:\t   51000 kB
VmSize:\t   50000 kB
VmLck:\t       0 kB
VmRSS:\t   20000 kB
VmData:\t   10000 kB
VmStk:\t     132 kB
Threads:\t11
"""


@pytest.fixture
def node_table() -> InMemoryProcessTable:
    """Process table with one node server among unrelated processes."""
    return InMemoryProcessTable(
        {
            1: FakeProcess("/sbin/init splash", status="VmSize:\t 1000 kB\n"),
            4242: FakeProcess("/usr/bin/node server.js", status=NODE_STATUS),
            5000: FakeProcess("bash", status="VmSize:\t 2000 kB\n"),
        }
    )


@pytest.fixture
def node_status() -> str:
    """Status record of the node server process."""
    return NODE_STATUS
