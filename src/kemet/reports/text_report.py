"""Plain-text report — header, matches, summary and error tail.

The report is rendered only after the scan has finished, so recorded
errors are never interleaved with match lines:

*  Header: needle, root, case mode, extensions.
*  Match list (or ``No matches found.``).
*  Summary line with file and match totals.
*  ``Errors encountered:`` section when anything was recorded.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator

from kemet.core.config import SearchConfig
from kemet.core.discover import describe_os_error
from kemet.errors import SinkError
from kemet.model.match import Match
from kemet.model.scan_state import ScanState


def format_match(match: Match, show_line_content: bool) -> str:
    """``<path> (Line <n>)``, plus ``: <stripped line>`` when content is shown."""
    if show_line_content and match.line_content is not None:
        return f"{match.path} (Line {match.line_number}): {match.line_content.strip()}"
    return f"{match.path} (Line {match.line_number})"


def render_report(config: SearchConfig, state: ScanState) -> list[str]:
    lines: list[str] = [
        f'Searching for "{config.needle}" in {config.root} and all subfolders...',
    ]
    if config.case_sensitive:
        lines.append("Case-sensitive search enabled")
    lines.append(f"Extensions: {', '.join(config.extensions)}")
    lines.append("")

    if not state.matches:
        lines.append("No matches found.")
    else:
        lines.append(
            f"Found {state.match_count} matches in {state.files_searched} files:"
        )
        lines.append("")
        lines.extend(format_match(m, config.show_line_content) for m in state.matches)

    lines.append("")
    lines.append(
        f"Summary: {state.files_searched} files searched, "
        f"{state.match_count} matches found"
    )

    if state.errors:
        lines.append("")
        lines.append("Errors encountered:")
        lines.extend(f"  {issue.message}" for issue in state.errors)

    return lines


class ReportSink:
    """Line-oriented writer over stdout or an owned output file."""

    def __init__(self, stream: IO[str], *, path: Path | None = None) -> None:
        self.stream = stream
        self.path = path

    def write_line(self, text: str) -> None:
        try:
            self.stream.write(text + "\n")
        except OSError as exc:
            target = self.path if self.path is not None else "stdout"
            raise SinkError(
                f"Could not write to {target}: {describe_os_error(exc)}"
            ) from exc


@contextmanager
def open_sink(output: Path | None, *, stdout: IO[str] | None = None) -> Iterator[ReportSink]:
    """Yield a ``ReportSink`` for *output*; ``None`` means standard output.

    A file target is created or truncated up front, so an unusable path
    fails with ``SinkError`` before any scanning happens.  The file is
    closed on exit, including when the body raises.
    """
    if output is None:
        yield ReportSink(stdout if stdout is not None else sys.stdout)
        return

    try:
        handle = open(output, "w", encoding="utf-8", newline="\n")
    except OSError as exc:
        raise SinkError(
            f"Could not create output file {output}: {describe_os_error(exc)}"
        ) from exc
    with handle:
        yield ReportSink(handle, path=output)


def write_report(sink: ReportSink, lines: Iterable[str]) -> None:
    for line in lines:
        sink.write_line(line)
