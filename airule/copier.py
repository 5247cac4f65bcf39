"""Copy selected files and directories into a freshly cleared destination."""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Iterable


class CopyError(Exception):
    """Raised when files cannot be copied to the destination."""


def _clear_destination_dir(directory: str) -> None:
    try:
        if os.path.isdir(directory) and not os.path.islink(directory):
            shutil.rmtree(directory)
        elif os.path.lexists(directory):
            os.remove(directory)
    except OSError as exc:
        raise CopyError(f"failed to clear destination directory: {exc}") from exc
    try:
        os.makedirs(directory, 0o755, exist_ok=True)
    except OSError as exc:
        raise CopyError(f"failed to recreate destination directory: {exc}") from exc


def _copy_file(src: str, dst: str) -> None:
    parent = os.path.dirname(dst)
    if parent:
        os.makedirs(parent, 0o755, exist_ok=True)
    shutil.copy(src, dst)


def _copy_dir(src: str, dst: str) -> None:
    os.makedirs(dst, 0o755, exist_ok=True)
    os.chmod(dst, stat.S_IMODE(os.stat(src).st_mode))
    with os.scandir(src) as scanner:
        entries = sorted(scanner, key=lambda entry: entry.name)
    for entry in entries:
        target = os.path.join(dst, entry.name)
        if entry.is_dir(follow_symlinks=False):
            _copy_dir(entry.path, target)
        else:
            _copy_file(entry.path, target)


def copy_files(
    from_dir: str | os.PathLike[str],
    to_dir: str | os.PathLike[str],
    relative_paths: Iterable[str],
) -> None:
    """Clear *to_dir*, then copy each relative path from *from_dir* into it.

    Directories are copied recursively; file and directory modes are kept.
    """
    source_root = os.fspath(from_dir)
    dest_root = os.fspath(to_dir)
    _clear_destination_dir(dest_root)

    for rel_path in relative_paths:
        src = os.path.join(source_root, rel_path)
        dst = os.path.join(dest_root, rel_path)
        try:
            info = os.stat(src)
        except OSError as exc:
            raise CopyError(f"failed to get file info for {src}: {exc}") from exc

        is_dir = stat.S_ISDIR(info.st_mode)
        try:
            if is_dir:
                _copy_dir(src, dst)
            else:
                _copy_file(src, dst)
        except OSError as exc:
            kind = "directory" if is_dir else "file"
            raise CopyError(f"failed to copy {kind} {rel_path}: {exc}") from exc