"""Command-line options, their validation and version information."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

APP_NAME = "airule"

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@dataclass
class _BuildInfo:
    version: str = "dev"
    commit: str = "none"
    build_date: str = "unknown"


_BUILD = _BuildInfo()


class CLIError(ValueError):
    """Raised when the command-line options are incomplete."""


@dataclass
class CLI:
    """Options that control which files are offered and where they go."""

    from_dir: str = ""
    to_dir: str = ""
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    select_all: bool = False
    pre_select: list[str] = field(default_factory=list)
    version: bool = False

    def validate(self) -> None:
        """Raise CLIError when a required option is missing."""
        if self.version:
            return
        if not self.from_dir:
            raise CLIError("--from flag is required")
        if not self.to_dir:
            raise CLIError("--to flag is required")


def get_version() -> str:
    """Return the version line shown by ``--version``."""
    return f"{_BUILD.version} (commit: {_BUILD.commit}, built at: {_BUILD.build_date})"


def set_version_info(ver: str, cmt: str, date: str) -> None:
    """Replace the version details; empty values leave the current ones."""
    if ver:
        _BUILD.version = ver
    if cmt:
        _BUILD.commit = cmt
    if date:
        _BUILD.build_date = date


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Interactively copy rule files.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--from", dest="from_dir", metavar="PATH",
        help="Source directory to copy files from ($AIRULE_FROM).",
    )
    parser.add_argument(
        "--to", dest="to_dir", metavar="PATH",
        help="Destination directory to copy files to ($AIRULE_TO).",
    )
    parser.add_argument(
        "-i", "--include", action="append", metavar="PATTERN",
        help="Patterns to include (glob syntax, e.g. '*.go') ($AIRULE_INCLUDE).",
    )
    parser.add_argument(
        "-e", "--exclude", action="append", metavar="PATTERN",
        help="Patterns to exclude (glob syntax, e.g. '*.tmp') ($AIRULE_EXCLUDE).",
    )
    parser.add_argument(
        "--select-all", dest="select_all", action="store_true", default=None,
        help="Select all files matching the include/exclude patterns ($AIRULE_SELECT_ALL).",
    )
    parser.add_argument(
        "--pre-select", dest="pre_select", action="append", metavar="PATTERN",
        help="Patterns to pre-select (glob syntax, e.g. '*.go') ($AIRULE_PRE_SELECT).",
    )
    parser.add_argument(
        "-v", "--version", action="version",
        version=f"{APP_NAME} {get_version()}",
        help="Show version and exit.",
    )
    return parser


def _split(values: Iterable[str]) -> list[str]:
    return [part for value in values for part in value.split(",") if part]


def _expand_path(path: str) -> str:
    return os.path.abspath(os.path.expanduser(path)) if path else ""


def parse_args(argv: Sequence[str] | None = None) -> CLI:
    """Parse *argv*, falling back to AIRULE_* environment variables."""
    parser = _build_parser()
    namespace = parser.parse_args(sys.argv[1:] if argv is None else list(argv))
    environ = os.environ

    def text(value: str | None, env: str) -> str:
        return value if value is not None else environ.get(env, "")

    def patterns(values: list[str] | None, env: str) -> list[str]:
        if values is not None:
            return _split(values)
        return _split([environ.get(env, "")])

    select_all = namespace.select_all
    if select_all is None:
        raw = environ.get("AIRULE_SELECT_ALL", "")
        if raw in _TRUE_WORDS:
            select_all = True
        elif raw in _FALSE_WORDS or not raw:
            select_all = False
        else:
            parser.error(f"--select-all: invalid boolean value {raw!r}")

    return CLI(
        from_dir=_expand_path(text(namespace.from_dir, "AIRULE_FROM")),
        to_dir=_expand_path(text(namespace.to_dir, "AIRULE_TO")),
        include=patterns(namespace.include, "AIRULE_INCLUDE"),
        exclude=patterns(namespace.exclude, "AIRULE_EXCLUDE"),
        select_all=select_all,
        pre_select=patterns(namespace.pre_select, "AIRULE_PRE_SELECT"),
    )