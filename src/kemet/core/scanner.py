"""Scanner — walk the tree and collect line matches into a ``ScanState``."""

from __future__ import annotations

import logging

from kemet.core.config import SearchConfig
from kemet.core.discover import describe_os_error, iter_search_files
from kemet.model import IssueKind
from kemet.model.match import Match
from kemet.model.scan_state import ScanState

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


def decode_line(raw: bytes) -> str:
    """Decode one raw line, dropping ``\\n`` and a ``\\r`` that precedes it."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode(_ENCODING)


class Scanner:
    """Literal substring search over every matching file under ``config.root``.

    One instance performs one run; ``run()`` returns the populated state.
    Each line yields at most one ``Match`` regardless of how many times the
    needle occurs in it.
    """

    def __init__(self, config: SearchConfig) -> None:
        self.config = config
        self.state = ScanState()
        self._needle = config.needle if config.case_sensitive else config.needle.lower()

    def _record_error(self, kind: IssueKind, message: str) -> None:
        logger.debug("Recorded %s issue: %s", kind.value, message)
        self.state.record_error(kind, message)

    def run(self) -> ScanState:
        for path in iter_search_files(
            self.config.root,
            self.config.extension_keys,
            on_error=self._record_error,
        ):
            self.scan_file(path)
        logger.debug(
            "Scan finished: %d files, %d matches, %d errors",
            self.state.files_searched,
            self.state.match_count,
            len(self.state.errors),
        )
        return self.state

    def scan_file(self, path: str) -> None:
        try:
            handle = open(path, "rb")
        except OSError as exc:
            self._record_error(
                IssueKind.FILE,
                f"Could not open file {path}: {describe_os_error(exc)}",
            )
            return

        self.state.files_searched += 1
        logger.debug("Searching %s", path)

        case_sensitive = self.config.case_sensitive
        keep_line = self.config.show_line_content
        with handle:
            line_number = 1
            while True:
                try:
                    raw = handle.readline()
                    if not raw:
                        break
                    line = decode_line(raw)
                except (OSError, UnicodeDecodeError) as exc:
                    self._record_error(
                        IssueKind.FILE,
                        f"Could not read line {line_number} in file {path}: "
                        f"{describe_os_error(exc)}",
                    )
                    break

                haystack = line if case_sensitive else line.lower()
                if self._needle in haystack:
                    self.state.record_match(
                        Match(
                            path=path,
                            line_number=line_number,
                            line_content=line if keep_line else None,
                        )
                    )
                line_number += 1
