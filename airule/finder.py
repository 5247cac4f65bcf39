"""Locate files under a directory and filter them with glob patterns."""

from __future__ import annotations

import functools
import os
import re
from collections import deque
from collections.abc import Iterator, Sequence

_SEP = os.sep
_ESCAPES = _SEP != "\\"


class _BadPattern(ValueError):
    """Raised internally for a malformed glob pattern."""


def _class_char(chars: deque[str]) -> str:
    if not chars or chars[0] in "-]":
        raise _BadPattern
    char = chars.popleft()
    if char == "\\" and _ESCAPES:
        if not chars:
            raise _BadPattern
        char = chars.popleft()
    return char


def _parse_class(chars: deque[str]) -> str:
    negate = bool(chars) and chars[0] == "^"
    if negate:
        chars.popleft()
    items: list[str] = []
    ranges = 0
    while True:
        if not chars:
            raise _BadPattern
        if chars[0] == "]" and ranges:
            chars.popleft()
            break
        low = _class_char(chars)
        high = low
        if chars and chars[0] == "-":
            chars.popleft()
            high = _class_char(chars)
        ranges += 1
        if low > high:
            continue  # an inverted range matches nothing
        if low == high:
            items.append(re.escape(low))
        else:
            items.append(f"{re.escape(low)}-{re.escape(high)}")
    if not items:
        return "." if negate else "(?!)"
    return "[" + ("^" if negate else "") + "".join(items) + "]"


@functools.lru_cache(maxsize=512)
def _compile(pattern: str) -> re.Pattern[str] | None:
    """Translate a shell glob into a regex; None when the pattern is malformed."""
    not_sep = f"[^{re.escape(_SEP)}]"
    chars = deque(pattern)
    parts: list[str] = []
    try:
        while chars:
            char = chars.popleft()
            if char == "*":
                parts.append(not_sep + "*")
            elif char == "?":
                parts.append(not_sep)
            elif char == "\\" and _ESCAPES:
                if not chars:
                    raise _BadPattern
                parts.append(re.escape(chars.popleft()))
            elif char == "[":
                parts.append(_parse_class(chars))
            else:
                parts.append(re.escape(char))
    except _BadPattern:
        return None
    return re.compile("".join(parts), re.DOTALL)


def _glob_match(pattern: str, name: str) -> bool:
    regex = _compile(pattern)
    return regex is not None and regex.fullmatch(name) is not None


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip(_SEP)
    if not stripped:
        return _SEP
    return stripped.rsplit(_SEP, 1)[-1]


def _within_dir_pattern(path: str, pattern: str) -> bool:
    """Handle patterns of the form ``dir/*`` and ``dir/**``."""
    if not (pattern.endswith("/*") or pattern.endswith("/**")):
        return False
    dir_pattern = pattern.removesuffix("*").removesuffix("/")
    if dir_pattern and path.startswith(dir_pattern + _SEP):
        return True
    return path == dir_pattern


def _matches(path: str, pattern: str) -> bool:
    if _glob_match(pattern, path):
        return True
    if _SEP not in pattern and _glob_match(pattern, _base(path)):
        return True
    return _within_dir_pattern(path, pattern)


def _is_excluded_dir(rel_path: str, excludes: Sequence[str]) -> bool:
    return any(
        _glob_match(pattern, rel_path) or _within_dir_pattern(rel_path, pattern)
        for pattern in excludes
    )


def _iter_files(directory: str, prefix: str, excludes: Sequence[str]) -> Iterator[str]:
    try:
        with os.scandir(directory) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        rel_path = os.path.join(prefix, entry.name) if prefix else entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            if not _is_excluded_dir(rel_path, excludes):
                yield from _iter_files(entry.path, rel_path, excludes)
        else:
            yield rel_path


def should_include(path: str, includes: Sequence[str], excludes: Sequence[str]) -> bool:
    """Return whether *path* passes the include and exclude patterns.

    Exclusions win; with no include patterns everything not excluded passes.
    """
    if any(_matches(path, pattern) for pattern in excludes):
        return False
    if not includes:
        return True
    return any(_matches(path, pattern) for pattern in includes)


def find_files(
    root_dir: str | os.PathLike[str],
    includes: Sequence[str],
    excludes: Sequence[str],
) -> list[str]:
    """List matching files, and their non-excluded parent directories, under *root_dir*.

    Paths are relative to *root_dir* and sorted in reverse order.
    Raises FileNotFoundError when *root_dir* does not exist.
    """
    root = os.fspath(root_dir)
    os.stat(root)

    files = [
        rel_path
        for rel_path in _iter_files(root, "", excludes)
        if should_include(rel_path, includes, excludes)
    ]

    parents: set[str] = set()
    for rel_path in files:
        parent = os.path.dirname(rel_path)
        while parent and parent != _SEP:
            parents.add(parent)
            parent = os.path.dirname(parent)

    results = set(files)
    results.update(d for d in parents if should_include(d, ["*"], excludes))
    return sorted(results, reverse=True)