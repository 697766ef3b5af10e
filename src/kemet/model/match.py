"""Match and ScanIssue — the records a scan produces."""

from __future__ import annotations

from dataclasses import dataclass

from . import IssueKind


@dataclass(frozen=True, slots=True)
class Match:
    """A line containing the needle.

    ``line_content`` is the raw line (terminator removed, case untouched) and
    is only captured when line display was requested.
    """

    path: str
    line_number: int
    line_content: str | None = None


@dataclass(frozen=True, slots=True)
class ScanIssue:
    """A recoverable I/O problem that did not stop the scan."""

    kind: IssueKind
    message: str

    def __str__(self) -> str:
        return self.message
