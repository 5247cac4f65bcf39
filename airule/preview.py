"""Text previews of files and directories for the selection window."""

from __future__ import annotations

import os
import stat

MAX_PREVIEW_SIZE = 100 * 1024

_BINARY_EXTENSIONS = frozenset(
    {
        ".exe", ".dll", ".so", ".dylib", ".bin", ".obj",
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico",
        ".zip", ".tar", ".gz", ".rar", ".7z",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    }
)

_TRUNCATED = "... (truncated)"


class PreviewError(Exception):
    """Raised when a preview cannot be produced."""


def _extension(filename: str) -> str:
    base = filename.rsplit(os.sep, 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def is_binary_filename(filename: str) -> bool:
    """Return whether the file's extension marks it as binary."""
    return _extension(filename).lower() in _BINARY_EXTENSIONS


def format_content_for_display(content: str, width: int, height: int) -> str:
    """Trim *content* to fit a window of *width* columns and *height* rows."""
    lines = content.split("\n")
    max_lines = height - 2
    if len(lines) > max_lines:
        if max_lines < 0:
            raise ValueError("height must be at least 2")
        lines = lines[:max_lines] + [_TRUNCATED]

    def fit(line: str) -> str:
        if len(line) <= width - 4:
            return line
        if width < 7:
            raise ValueError("width must be at least 7 to truncate lines")
        return line[: width - 7] + "..."

    return "\n".join([fit(line) for line in lines])


def _directory_preview(dir_path: str) -> str:
    try:
        with os.scandir(dir_path) as scanner:
            entries = sorted(scanner, key=lambda entry: entry.name)
    except OSError as exc:
        raise PreviewError(f"failed to read directory: {exc}") from exc

    parts = [f"Directory: {dir_path}\n\n", "Contents:\n"]
    for entry in entries:
        try:
            info = entry.stat(follow_symlinks=False)
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            parts.append(f"[D] {entry.name}/\n")
        else:
            parts.append(f"[F] {entry.name} ({info.st_size / 1024:.2f} KB)\n")
    return "".join(parts)


def generate_preview(
    base_dir: str | os.PathLike[str],
    rel_path: str,
    width: int,
    height: int,
) -> str:
    """Describe the file or directory at *rel_path* under *base_dir*."""
    full_path = os.path.normpath(os.path.join(os.fspath(base_dir), rel_path))
    try:
        info = os.stat(full_path)
    except OSError as exc:
        raise PreviewError(f"failed to get file info: {exc}") from exc

    if stat.S_ISDIR(info.st_mode):
        return _directory_preview(full_path)

    if info.st_size > MAX_PREVIEW_SIZE:
        return f"File too large to preview ({info.st_size / 1024 / 1024:.2f} MB)"

    try:
        with open(full_path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise PreviewError(f"failed to read file: {exc}") from exc

    if is_binary_filename(full_path):
        name = os.path.basename(full_path)
        return f"Binary file ({name}, {info.st_size / 1024:.2f} KB)"

    return format_content_for_display(data.decode("utf-8", errors="replace"), width, height)