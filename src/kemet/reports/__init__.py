"""Report rendering and output sinks."""

from kemet.reports.text_report import (
    ReportSink,
    format_match,
    open_sink,
    render_report,
    write_report,
)

__all__ = [
    "ReportSink",
    "format_match",
    "open_sink",
    "render_report",
    "write_report",
]
