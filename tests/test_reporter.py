"""Tests for the memory reporter."""

import pytest

from procmem.models import MemoryInfo, ReadStatus
from procmem.reporter import (
    parse_status_line,
    parse_status_lines,
    read_memory_reading,
    read_memory_usage,
)
from procmem.source import FakeProcess, InMemoryProcessTable


class TestParseStatusLine:
    """Tests for parse_status_line."""

    def test_well_formed(self):
        """Test a tab separated procfs line is parsed."""
        assert parse_status_line("VmSize:\t   1234 kB\n") == ("VmSize:", 1234)

    def test_single_spaces(self):
        """Test a space separated line is parsed."""
        assert parse_status_line("VmSize: 1234 kB") == ("VmSize:", 1234)

    @pytest.mark.parametrize(
        "line",
        [
            "VmSize: abc kB",
            "VmSize: 1234",
            "VmSize: 1234 MB",
            "VmSize: -5 kB",
            "VmSize: +5 kB",
            "VmSize: 1_000 kB",
            "VmSize: 12 kB extra",
            "Name:\tnode",
            "Threads:\t11",
            "",
        ],
    )
    def test_malformed(self, line):
        """Test lines of any other shape are rejected."""
        assert parse_status_line(line) is None


class TestParseStatusLines:
    """Tests for parse_status_lines."""

    def test_all_fields(self):
        """Test the four memory fields are collected."""
        reading = parse_status_lines(
            ["VmSize: 50000 kB", "VmRSS: 20000 kB", "VmData: 10000 kB", "VmStk: 132 kB"]
        )

        assert reading.status is ReadStatus.OK
        assert reading.info == MemoryInfo(vm_size=50000, vm_rss=20000, vm_data=10000, vm_stack=132)

    def test_key_without_colon_ignored(self):
        """Test keys must match exactly, including the colon."""
        reading = parse_status_lines(["VmSize 1234 kB"])

        assert reading.info.vm_size == 0
        assert reading.status is ReadStatus.NO_FIELDS_PARSED

    def test_unrecognized_keys_ignored(self):
        """Test other kB fields do not populate the record."""
        reading = parse_status_lines(["VmPeak: 9 kB", "VmHWM: 8 kB", "VmLck: 0 kB"])

        assert reading.info == MemoryInfo()
        assert reading.status is ReadStatus.NO_FIELDS_PARSED

    def test_malformed_keeps_prior_value(self):
        """Test a malformed repeat leaves the earlier value in place."""
        reading = parse_status_lines(["VmRSS: 10 kB", "VmRSS: lots kB"])

        assert reading.info.vm_rss == 10

    def test_last_occurrence_wins(self):
        """Test a repeated key overwrites the earlier value."""
        reading = parse_status_lines(["VmSize: 1 kB", "VmSize: 2 kB"])

        assert reading.info.vm_size == 2

    def test_partial_fields_ok(self):
        """Test any recognized field makes the reading OK."""
        reading = parse_status_lines(["VmRSS: 10 kB"])

        assert reading.status is ReadStatus.OK
        assert reading.info == MemoryInfo(vm_rss=10)

    def test_empty_record(self):
        """Test an empty record parses no fields."""
        assert parse_status_lines([]).status is ReadStatus.NO_FIELDS_PARSED


class TestReadMemory:
    """Tests for reading memory through a process table."""

    def test_read_memory_usage(self, node_table):
        """Test metrics are read from the status record."""
        info = read_memory_usage(node_table, 4242)

        assert info == MemoryInfo(vm_size=50000, vm_rss=20000, vm_data=10000, vm_stack=132)

    def test_unopened_record(self):
        """Test an unreadable record gives NOT_OPENED and zero metrics."""
        table = InMemoryProcessTable({1: FakeProcess("node")})

        reading = read_memory_reading(table, 1)

        assert reading.status is ReadStatus.NOT_OPENED
        assert reading.info == MemoryInfo()
        assert read_memory_usage(table, 1) == MemoryInfo()

    def test_vanished_process(self):
        """Test a process gone before the read gives NOT_OPENED."""
        table = InMemoryProcessTable({1: FakeProcess("node", status="VmSize: 1 kB", gone=True)})

        assert read_memory_reading(table, 1).status is ReadStatus.NOT_OPENED

    def test_unknown_pid(self, node_table):
        """Test a pid missing from the table gives NOT_OPENED."""
        assert read_memory_reading(node_table, 31337).status is ReadStatus.NOT_OPENED

    def test_record_without_fields(self):
        """Test a readable record with no memory lines gives NO_FIELDS_PARSED."""
        table = InMemoryProcessTable({1: FakeProcess("kthreadd", status="Name:\tkthreadd\nThreads:\t1\n")})

        assert read_memory_reading(table, 1).status is ReadStatus.NO_FIELDS_PARSED

    def test_idempotent(self, node_table):
        """Test reading the same static record twice gives equal values."""
        assert read_memory_usage(node_table, 4242) == read_memory_usage(node_table, 4242)
        assert node_table.status_reads == 2
