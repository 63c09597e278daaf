"""Formatting helpers for CLI output."""

import stat
from datetime import datetime, timezone

from common.types import FileAttributes


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable format with appropriate unit.

    Uses binary units (1024-based) and automatically selects the most
    appropriate unit (B, KiB, MiB, GiB, TiB).

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string with size and unit (e.g., "1.50 MiB", "512 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    units = ['KiB', 'MiB', 'GiB', 'TiB']
    size = size_bytes / 1024.0

    for unit in units:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0

    return f"{size:.2f} PiB"


def format_mode(permission: int, is_dir: bool) -> str:
    """Render permission bits the way ls -l does (e.g. "drwxr-xr-x")."""
    file_type = stat.S_IFDIR if is_dir else stat.S_IFREG
    return stat.filemode(file_type | (permission & 0o7777))


def format_timestamp(millis: int) -> str:
    """Render a millisecond epoch timestamp as UTC, or "-" when unknown."""
    if not millis:
        return "-"
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime('%Y-%m-%d %H:%M')


def format_entry(entry: FileAttributes) -> str:
    """One ls -l style line for a directory entry."""
    name = f"{entry.name}/" if entry.is_dir else entry.name
    return (
        f"{format_mode(entry.permission, entry.is_dir)} "
        f"{entry.owner or '-':<10} {entry.group or '-':<10} "
        f"{entry.size:>12} {format_timestamp(entry.modification_time)} {name}"
    )
