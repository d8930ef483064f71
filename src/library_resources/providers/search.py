"""Content-search provider backed by grep."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from library_resources.engine.errors import ProviderError
from library_resources.providers.base import ContentSearchProvider

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

# grep exits 1 when nothing matched.
_NO_MATCH_STATUS = 1


class GrepSearchProvider(ContentSearchProvider):
    """Streams ``grep -r -n -i`` output and stops reading once the cap is reached."""

    def __init__(self, executable: str = "grep") -> None:
        self._executable = executable

    def _command(self, root: Path, query: str, include: str | None) -> list[str]:
        cmd = [self._executable, "-r", "-n", "-i", "--exclude-dir=.git"]
        if include:
            cmd.append(f"--include={include}")
        cmd.extend(["-e", query, str(root)])
        return cmd

    def search(
        self,
        root: Path,
        query: str,
        *,
        include: str | None = None,
        max_matches: int = 50,
    ) -> list[str]:
        cmd = self._command(root, query, include)
        logger.debug("Running %s", " ".join(cmd))

        lines: list[str] = []
        capped = False
        with subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
        ) as proc:
            assert proc.stdout is not None
            for line in proc.stdout:
                lines.append(line.rstrip("\n"))
                if len(lines) >= max_matches:
                    capped = True
                    proc.kill()
                    break

        status = proc.returncode
        if not capped and not lines and status not in (0, _NO_MATCH_STATUS):
            raise ProviderError("searching", f"grep exited with status {status}")
        return lines
