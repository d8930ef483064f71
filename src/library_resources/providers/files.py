"""File-enumeration and stats provider for local working copies."""

from __future__ import annotations

import os
from pathlib import Path

from library_resources.providers.base import FileProvider

_SKIP_DIRS = frozenset({".git"})
_SIZE_UNITS = ("K", "M", "G", "T")


def human_size(num_bytes: int) -> str:
    """Format a byte count the way ``du -h`` does (``512``, ``4.0K``, ``1.3M``)."""
    if num_bytes < 1024:
        return str(num_bytes)
    size = float(num_bytes)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        size /= 1024
        if size < 1024:
            break
    return f"{size:.1f}{unit}"


class LocalFileProvider(FileProvider):
    def list_files(self, target: Path, max_depth: int) -> list[Path]:
        if target.is_file():
            return [target]

        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(target):
            level = len(Path(dirpath).relative_to(target).parts) + 1
            dirnames[:] = [d for d in dirnames if d not in _SKIP_DIRS]
            if level >= max_depth:
                dirnames.clear()
            if level <= max_depth:
                found.extend(Path(dirpath) / f for f in filenames)
        return sorted(found, key=str)

    def file_count(self, path: Path) -> int:
        return sum(len(filenames) for _, _, filenames in os.walk(path))

    def disk_usage(self, path: Path) -> str:
        total = 0
        for dirpath, _, filenames in os.walk(path):
            for f in filenames:
                total += (Path(dirpath) / f).lstat().st_size
        return human_size(total)
