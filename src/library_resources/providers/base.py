"""Provider interfaces for the external tools the registry delegates to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True)
class ProviderResult:
    """Exit status and captured output of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Best message to show for a failed call."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"exited with status {self.returncode}"


class VersionControlProvider:
    """Clones and pulls working copies.

    Implementations return a ``ProviderResult`` for non-zero exits and may
    raise ``OSError`` when the tool cannot be run at all.
    """

    def clone(self, url: str, branch: str, dest: Path) -> ProviderResult:
        raise NotImplementedError

    def pull(self, path: Path) -> ProviderResult:
        raise NotImplementedError

    def last_commit(self, path: Path) -> ProviderResult:
        """One-line summary of HEAD: short hash, subject, relative date."""
        raise NotImplementedError


class ContentSearchProvider:
    """Recursive, case-insensitive text search over a directory."""

    def search(
        self,
        root: Path,
        query: str,
        *,
        include: str | None = None,
        max_matches: int = 50,
    ) -> list[str]:
        """Return up to *max_matches* ``path:line:text`` lines.

        No matches is an empty list, not an error.
        """
        raise NotImplementedError


class FileProvider:
    """Depth-bounded file listing and working-copy statistics."""

    def list_files(self, target: Path, max_depth: int) -> list[Path]:
        """All files at most *max_depth* levels below *target*, sorted."""
        raise NotImplementedError

    def file_count(self, path: Path) -> int:
        raise NotImplementedError

    def disk_usage(self, path: Path) -> str:
        """Human-readable total size (e.g. ``"1.4M"``)."""
        raise NotImplementedError
