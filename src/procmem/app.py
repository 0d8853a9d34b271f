"""procmem - one-shot Textual report view."""

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from procmem.display import format_mb
from procmem.models import MemoryInfo


def header_text(pid: int, command_line: str) -> str:
    """Header text for a process, safe to use as Textual markup."""
    # Escape brackets so markup does not eat argv text
    command = command_line.replace("[", "\\[")
    return f"PID {pid}\n{command[:200]}"


class ProcessHeader(Static):
    """Header widget naming the reported process."""

    DEFAULT_CSS = """
    ProcessHeader {
        height: auto;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, pid: int, command_line: str, *args, **kwargs) -> None:
        """Initialize ProcessHeader."""
        super().__init__(header_text(pid, command_line), *args, **kwargs)


class MemoryTable(Container):
    """Container for the memory metrics table."""

    DEFAULT_CSS = """
    MemoryTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, info: MemoryInfo, *args, **kwargs) -> None:
        """Initialize MemoryTable."""
        super().__init__(*args, **kwargs)
        self._info = info

    def compose(self) -> ComposeResult:
        """Compose the memory table."""
        yield DataTable(id="memory-table")

    def on_mount(self) -> None:
        """Fill the data table when mounted."""
        table = self.query_one("#memory-table", DataTable)
        table.cursor_type = "row"

        table.add_column("Metric", key="metric", width=14)
        table.add_column("KB", key="kb", width=12)
        table.add_column("MB", key="mb", width=10)

        info = self._info
        # Only the virtual and resident sizes carry a megabyte column
        table.add_row("Virtual Size", str(info.vm_size), format_mb(info.vm_size), key="vm_size")
        table.add_row("Physical RSS", str(info.vm_rss), format_mb(info.vm_rss), key="vm_rss")
        table.add_row("Data Segment", str(info.vm_data), "", key="vm_data")
        table.add_row("Stack Size", str(info.vm_stack), "", key="vm_stack")


class MemoryReportApp(App):
    """Show the memory report of one process until the user quits."""

    TITLE = "procmem"
    SUB_TITLE = "Process Memory Report"

    CSS = """
    Screen {
        layout: vertical;
    }

    #process-header {
        dock: top;
        height: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, pid: int, command_line: str, info: MemoryInfo) -> None:
        """Initialize the MemoryReportApp."""
        super().__init__()
        self._pid = pid
        self._command_line = command_line
        self._info = info

    @property
    def info(self) -> MemoryInfo:
        """Get the reported metrics."""
        return self._info

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield ProcessHeader(self._pid, self._command_line, id="process-header")
        yield MemoryTable(self._info)
        yield Footer()

    def action_quit(self) -> None:
        """Handle quit action."""
        self.exit()
