"""Pytest fixtures for integration tests against the real git and grep executables."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

import pytest

from library_resources.config import build_content, build_manager, load_settings
from library_resources.engine.content import ContentService
from library_resources.engine.manager import ResourceManager

_ORIGIN_FILES = {
    "README.md": "# Demo docs\n",
    "docs/runes.md": "# Runes\n\nUse $state for reactive values.\n",
    "docs/guide/routing.md": "Routing is file based.\n",
}


def _git(*args: str, cwd: Path) -> None:
    subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True)


@pytest.fixture(autouse=True)
def _require_tools() -> None:
    for tool in ("git", "grep"):
        if shutil.which(tool) is None:
            pytest.skip(f"{tool} is not installed")


@pytest.fixture(autouse=True)
def _git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    for var in ("LIBRARY_RESOURCES_GLOBAL_DIR", "LIBRARY_RESOURCES_PROJECT_DIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def origin(tmp_path: Path) -> Path:
    """A local repository on branch ``main`` with one commit of docs."""
    repo = tmp_path / "origin"
    repo.mkdir()
    _git("init", "--quiet", cwd=repo)
    _git("symbolic-ref", "HEAD", "refs/heads/main", cwd=repo)
    for rel, text in _ORIGIN_FILES.items():
        path = repo / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
    _git("add", ".", cwd=repo)
    _git("commit", "--quiet", "-m", "Initial docs", cwd=repo)
    return repo


@pytest.fixture
def commit_to_origin(origin: Path):
    """Factory fixture: add a file to origin and commit it."""

    def _commit(rel: str, text: str) -> None:
        path = origin / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text)
        _git("add", rel, cwd=origin)
        _git("commit", "--quiet", "-m", f"Add {rel}", cwd=origin)

    return _commit


@pytest.fixture
def services(tmp_path: Path) -> tuple[ResourceManager, ContentService]:
    project = tmp_path / "project"
    project.mkdir()
    settings = load_settings(project, global_dir=tmp_path / "global")
    return build_manager(settings), build_content(settings)
