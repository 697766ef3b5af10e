"""Enums shared across the scanner and reporter."""

from __future__ import annotations

from enum import Enum


class IssueKind(str, Enum):
    """Category of a recoverable problem recorded during a scan."""

    TRAVERSAL = "traversal"   # directory or entry could not be read
    FILE = "file"             # file could not be opened or a line read
