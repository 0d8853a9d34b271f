"""Plain text rendering of memory metrics."""

from procmem.models import MemoryInfo, ProcessMatch


def format_mb(kilobytes: int) -> str:
    """Format a kilobyte count as megabytes with two decimals."""
    return f"{kilobytes / 1024.0:.2f}"


def format_memory(info: MemoryInfo) -> str:
    """Render the KB block followed by the MB block."""
    return (
        "Memory Usage (KB):\n"
        f"Virtual Size: {info.vm_size}\n"
        f"Physical RSS: {info.vm_rss}\n"
        f"Data Segment: {info.vm_data}\n"
        f"Stack Size: {info.vm_stack}\n"
        "\n"
        "Memory Usage (MB):\n"
        f"Virtual Size: {format_mb(info.vm_size)}\n"
        f"Physical RSS: {format_mb(info.vm_rss)}"
    )


def format_match(match: ProcessMatch) -> str:
    """Render one row of the match listing."""
    return f"{match.pid} {match.command_line}"
