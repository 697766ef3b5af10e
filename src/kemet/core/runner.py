"""Runner — one search run from open sink to written report."""

from __future__ import annotations

import logging
import sys
from typing import IO

from kemet.core.config import SearchConfig
from kemet.core.scanner import Scanner
from kemet.model.scan_state import ScanState
from kemet.reports.text_report import open_sink, render_report, write_report

logger = logging.getLogger(__name__)


def run_search(config: SearchConfig, *, stdout: IO[str] | None = None) -> ScanState:
    """Scan ``config.root`` and write the report to the configured sink.

    The sink is opened first so an unusable output path raises ``SinkError``
    before anything is scanned.  When the report goes to a file, a one-line
    pointer to it is printed on *stdout*.
    """
    out = stdout if stdout is not None else sys.stdout

    with open_sink(config.output, stdout=out) as sink:
        logger.debug("Scanning %s for %r", config.root, config.needle)
        state = Scanner(config).run()
        write_report(sink, render_report(config, state))

    if config.output is not None:
        print(f"Results have been written to: {config.output}", file=out)
    return state
