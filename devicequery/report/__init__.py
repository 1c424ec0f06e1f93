"""Text rendering of device capability reports."""

from .formatter import (
    ReportSummary,
    format_clock,
    format_device,
    format_memory,
    format_peer_matrix,
    format_report,
    summarize,
)

__all__ = [
    "ReportSummary",
    "format_clock",
    "format_device",
    "format_memory",
    "format_peer_matrix",
    "format_report",
    "summarize",
]
