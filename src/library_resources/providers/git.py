"""Version-control provider backed by the git executable."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from library_resources.providers.base import ProviderResult, VersionControlProvider

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_LAST_COMMIT_FORMAT = "%h %s (%cr)"


class GitProvider(VersionControlProvider):
    """Runs ``git`` in a subprocess and captures its output."""

    def __init__(self, executable: str = "git") -> None:
        self._executable = executable

    def _run(self, *args: str) -> ProviderResult:
        cmd = [self._executable, *args]
        logger.debug("Running %s", " ".join(cmd))
        completed = subprocess.run(
            cmd,
            check=False,
            capture_output=True,
            text=True,
            errors="replace",
        )
        if completed.returncode != 0:
            logger.debug("%s exited %d: %s", cmd[1], completed.returncode, completed.stderr.strip())
        return ProviderResult(completed.returncode, completed.stdout, completed.stderr)

    def clone(self, url: str, branch: str, dest: Path) -> ProviderResult:
        return self._run("clone", "--branch", branch, "--", url, str(dest))

    def pull(self, path: Path) -> ProviderResult:
        return self._run("-C", str(path), "pull")

    def last_commit(self, path: Path) -> ProviderResult:
        return self._run("-C", str(path), "log", "-1", f"--format={_LAST_COMMIT_FORMAT}")
