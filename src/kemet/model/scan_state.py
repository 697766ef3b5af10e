"""ScanState — everything accumulated during one run."""

from __future__ import annotations

from dataclasses import dataclass, field

from . import IssueKind
from .match import Match, ScanIssue


@dataclass
class ScanState:
    """Mutable accumulator owned by a single ``Scanner`` run.

    ``matches`` and ``errors`` keep insertion order, which is the traversal
    order of the filesystem walk.
    """

    matches: list[Match] = field(default_factory=list)
    files_searched: int = 0
    errors: list[ScanIssue] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def record_match(self, match: Match) -> None:
        self.matches.append(match)

    def record_error(self, kind: IssueKind, message: str) -> ScanIssue:
        issue = ScanIssue(kind=kind, message=message)
        self.errors.append(issue)
        return issue
