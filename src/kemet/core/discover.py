"""File discovery — depth-first walk yielding files whose extension is searched."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Iterator

from kemet.model import IssueKind

logger = logging.getLogger(__name__)

OnError = Callable[[IssueKind, str], object]


def describe_os_error(exc: BaseException) -> str:
    """Short human reason for an I/O failure (``strerror`` when available)."""
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def file_extension_key(name: str) -> str | None:
    """Return the lower-cased dotted final extension of *name*, or ``None``.

    The extension is whatever follows the last ``.``: ``"a.b.TXT"`` →
    ``".txt"`` and ``"..txt"`` → ``".txt"``.  Names without a dot, and
    dotfiles whose only dot is the leading one (``".bashrc"``), have none.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return f".{ext}".lower()


def matches_extension(name: str, extension_keys: frozenset[str]) -> bool:
    key = file_extension_key(name)
    return key is not None and key in extension_keys


def iter_search_files(
    root: Path | str,
    extension_keys: frozenset[str],
    *,
    on_error: OnError,
) -> Iterator[str]:
    """Yield paths of regular files under *root* that pass the extension filter.

    Directories are visited depth-first in the order the host enumerates
    them; nothing is sorted.  A pending-directory stack replaces recursion,
    with each open ``os.scandir`` iterator kept on the stack so a child
    directory is finished before its next sibling entry is read.

    Problems are reported through *on_error* and never stop the walk:

    * a directory that cannot be listed is skipped
    * an entry that cannot be inspected is skipped

    Symlinks are treated the way ``DirEntry.is_dir()`` / ``is_file()``
    report them, i.e. followed.
    """
    stack: list[tuple[str, Iterator[os.DirEntry[str]]]] = []

    def _enter(dir_path: str) -> None:
        try:
            entries = os.scandir(dir_path)
        except OSError as exc:
            on_error(
                IssueKind.TRAVERSAL,
                f"Could not read directory {dir_path}: {describe_os_error(exc)}",
            )
            return
        logger.debug("Entering %s", dir_path)
        stack.append((dir_path, entries))

    _enter(os.fspath(root))
    try:
        while stack:
            dir_path, entries = stack[-1]
            try:
                entry = next(entries, None)
            except OSError as exc:
                # The iterator cannot be resumed reliably after a read failure.
                on_error(
                    IssueKind.TRAVERSAL,
                    f"Could not read entry in {dir_path}: {describe_os_error(exc)}",
                )
                entry = None
            if entry is None:
                stack.pop()
                entries.close()
                continue

            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as exc:
                on_error(
                    IssueKind.TRAVERSAL,
                    f"Could not read entry in {dir_path}: {describe_os_error(exc)}",
                )
                continue

            if is_dir:
                _enter(entry.path)
            elif is_file and matches_extension(entry.name, extension_keys):
                yield entry.path
    finally:
        for _, entries in stack:
            entries.close()
