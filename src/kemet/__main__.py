"""CLI entry-point for kemet.

Usage:
    python -m kemet -s <search_text> [-p PATH] [-e EXT,...] [-o FILE] [-c] [-l] [-v]
"""

from __future__ import annotations

import logging
import sys

from kemet.core.config import parse_config
from kemet.core.runner import run_search
from kemet.errors import ConfigError, SinkError
from kemet.utils.exit_codes import ExitCode


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 = scan completed, 1 = fatal error)."""
    effective_argv = list(argv) if argv is not None else sys.argv[1:]

    try:
        config = parse_config(effective_argv)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return ExitCode.ERROR

    _configure_logging(config.verbose)

    try:
        run_search(config)
    except SinkError as e:
        print(f"Search failed: {e}", file=sys.stderr)
        return ExitCode.ERROR

    return ExitCode.SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
