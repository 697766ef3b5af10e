"""Centralized exit-code contract for the CLI.

Code  Meaning
----  -------
  0   Success — scan completed (with or without matches or recorded errors)
  1   Error — invalid configuration, unusable root, or output sink failure
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1
