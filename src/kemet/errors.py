"""Fatal error hierarchy.

Only conditions that stop a run are raised.  Per-directory and per-file
problems are recorded on the ``ScanState`` as ``ScanIssue`` values instead.
"""

from __future__ import annotations


class KemetError(Exception):
    """Base error for kemet."""


class ConfigError(KemetError):
    """Raised when the command line cannot be turned into a ``SearchConfig``."""


class SinkError(KemetError):
    """Raised when the report destination cannot be created or written."""
