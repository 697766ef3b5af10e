"""Search configuration — command-line parsing and the immutable record.

``parse_config()`` is the single validating builder: it turns a token vector
into a ``SearchConfig`` or raises ``ConfigError`` with a message meant to be
shown to the user as-is.

Tokens are checked left to right against the exact flag spellings before
argparse sees them.  A value flag always takes the next token, even one
that starts with ``-``; the pair is handed to argparse as ``--flag=value``
so it cannot be mistaken for another option.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import NoReturn, Sequence

from kemet.errors import ConfigError

DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".txt",
    ".json",
    ".cs",
    ".sql",
    ".config",
    ".rs",
    ".py",
    ".js",
    ".ts",
    ".html",
    ".css",
    ".xml",
)

# -p values that mean "search the current directory".
_CWD_ALIASES = frozenset({".", "*"})

# Every accepted spelling → long flag.  Nothing else is recognised.
_FLAG_ALIASES: dict[str, str] = {
    "-p": "--path",
    "-s": "--search",
    "-e": "--extensions",
    "-o": "--output",
    "-c": "--case-sensitive",
    "-l": "--show-lines",
    "-v": "--verbose",
    "-h": "--help",
}
_FLAG_ALIASES.update({long: long for long in list(_FLAG_ALIASES.values())})

# Value-taking long flag → name used in error messages.
_VALUE_LABELS: dict[str, str] = {
    "--path": "path",
    "--search": "search text",
    "--extensions": "extensions",
    "--output": "output file",
}

_EXAMPLES = """\
examples:
  kemet -s "function"
  kemet -p /home/user/code -s "TODO" -e "rs,py,js"
  kemet -s "Error" -c -l
  kemet -s "function" -o results.txt
"""


@dataclass(frozen=True)
class SearchConfig:
    """Immutable description of one search run.

    ``root`` keeps the spelling it was given (``./src/`` stays ``./src/``);
    it is used verbatim in the report header and as the prefix of every
    reported path.
    """

    root: str
    needle: str
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    case_sensitive: bool = False
    show_line_content: bool = False
    output: Path | None = None     # None → stdout
    verbose: bool = False
    extension_keys: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.needle.strip():
            raise ConfigError("Empty search text provided")
        if not self.extensions:
            raise ConfigError("Empty extensions provided")
        object.__setattr__(self, "root", os.fspath(self.root))
        object.__setattr__(
            self, "extension_keys", frozenset(e.lower() for e in self.extensions)
        )

    @property
    def writes_to_file(self) -> bool:
        return self.output is not None


def normalize_extensions(raw: str) -> tuple[str, ...]:
    """Split a comma-separated list into dotted extension tokens.

    Items are trimmed; a leading ``.`` is kept, otherwise one is prepended.
    ``"rs"``, ``".rs"`` and ``"  rs  "`` all become ``".rs"``.
    """
    out: list[str] = []
    for item in raw.split(","):
        token = item.strip()
        out.append(token if token.startswith(".") else f".{token}")
    return tuple(out)


# ── argparse plumbing ──────────────────────────────────────────────


class _ConfigParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems as ``ConfigError`` instead of exiting."""

    def usage_text(self) -> str:
        return self.format_help().rstrip("\n")

    def error(self, message: str) -> NoReturn:
        raise ConfigError(f"{message}\n\n{self.usage_text()}")


def build_parser() -> _ConfigParser:
    p = _ConfigParser(
        prog="kemet",
        usage="kemet -s <search_text> [OPTIONS]",
        description="kemet - File Content Search Utility",
        epilog=_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    p.add_argument(
        "-p", "--path",
        metavar="PATH",
        help="Directory to search (default: current directory)",
    )
    p.add_argument(
        "-s", "--search",
        metavar="TEXT",
        help="Text to search for (required)",
    )
    p.add_argument(
        "-e", "--extensions",
        metavar="EXT",
        type=normalize_extensions,
        help=(
            "Comma-separated file extensions "
            "(default: txt,json,cs,sql,config,rs,py,js,ts,html,css,xml)"
        ),
    )
    p.add_argument(
        "-o", "--output",
        metavar="FILE",
        help="Output file path (if not provided, results shown on console)",
    )
    p.add_argument(
        "-c", "--case-sensitive",
        action="store_true",
        help="Enable case-sensitive search",
    )
    p.add_argument(
        "-l", "--show-lines",
        action="store_true",
        help="Show matching line content",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log scan progress to stderr",
    )
    p.add_argument(
        "-h", "--help",
        action="store_true",
        help="Show this help message",
    )
    return p


def usage_text() -> str:
    """Return the help text shown for ``-h`` and alongside usage errors."""
    return build_parser().usage_text()


def canonical_tokens(tokens: Sequence[str], usage: str) -> list[str]:
    """Validate *tokens* in order and rewrite them in long ``--flag=value`` form.

    The first problem found wins: an unknown token, ``-h``, a value flag at
    the end of the line, or a whitespace-only value.
    """
    out: list[str] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        flag = _FLAG_ALIASES.get(token)
        if flag is None:
            raise ConfigError(f"Unknown argument: {token}\n\n{usage}")
        if flag == "--help":
            raise ConfigError(usage)

        label = _VALUE_LABELS.get(flag)
        if label is None:
            out.append(flag)
            i += 1
            continue

        if i + 1 >= len(tokens):
            raise ConfigError(f"Missing value for {label}")
        value = tokens[i + 1]
        if not value.strip():
            raise ConfigError(f"Empty {label} provided")
        out.append(f"{flag}={value}")
        i += 2
    return out


def resolve_root(raw: str | None) -> str:
    """Resolve the ``-p`` value to an existing directory, keeping its spelling.

    Omitted, ``.`` and ``*`` mean the current working directory.
    """
    if raw is None or not raw.strip() or raw in _CWD_ALIASES:
        try:
            raw = os.getcwd()
        except OSError as exc:
            raise ConfigError(f"Failed to get current directory: {exc}") from exc

    if not os.path.exists(raw):
        raise ConfigError(f"Path does not exist: {raw}")
    if not os.path.isdir(raw):
        raise ConfigError(f"Path is not a directory: {raw}")
    return raw


def parse_config(argv: Sequence[str]) -> SearchConfig:
    """Build a ``SearchConfig`` from command-line tokens.

    Fewer than two tokens only ever shows the usage text.

    Raises
    ------
    ConfigError
        For ``-h``, unknown or malformed arguments, an unusable root, or a
        missing search text.  The message is ready for display.
    """
    parser = build_parser()
    usage = parser.usage_text()
    tokens = list(argv)
    if len(tokens) < 2:
        raise ConfigError(usage)

    args = parser.parse_args(canonical_tokens(tokens, usage))

    root = resolve_root(args.path)
    if args.search is None:
        raise ConfigError(f"Search text is required\n\n{usage}")

    return SearchConfig(
        root=root,
        needle=args.search,
        extensions=args.extensions or DEFAULT_EXTENSIONS,
        case_sensitive=args.case_sensitive,
        show_line_content=args.show_lines,
        output=Path(args.output) if args.output is not None else None,
        verbose=args.verbose,
    )
