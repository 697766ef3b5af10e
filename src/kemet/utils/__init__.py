"""Shared utilities for kemet."""

from kemet.utils.exit_codes import ExitCode

__all__ = ["ExitCode"]
