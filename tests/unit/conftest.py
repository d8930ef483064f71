"""Shared fixtures for unit tests."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from library_resources.core.layout import ResourceLayout
from library_resources.core.registry import RegistryStore, Resource, Scope
from library_resources.engine.content import ContentService
from library_resources.engine.manager import ResourceManager
from library_resources.providers.base import (
    ContentSearchProvider,
    ProviderResult,
    VersionControlProvider,
)
from library_resources.providers.files import LocalFileProvider

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

OLD = datetime(2020, 1, 1, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove LIBRARY_RESOURCES_* env vars so unit tests don't leak host config."""
    for var in list(os.environ):
        if var.startswith("LIBRARY_RESOURCES_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


class FakeVCS(VersionControlProvider):
    """Records calls; a clone creates a directory with a README."""

    def __init__(self) -> None:
        self.clones: list[tuple[str, str, Path]] = []
        self.pulls: list[Path] = []
        self.failing_urls: set[str] = set()
        self.failing_pulls: set[str] = set()
        self.pull_output = "Updating abc..def\nFast-forward"

    def clone(self, url: str, branch: str, dest: Path) -> ProviderResult:
        self.clones.append((url, branch, dest))
        if url in self.failing_urls:
            return ProviderResult(128, "", f"fatal: repository '{url}' not found\n")
        dest.mkdir(parents=True)
        (dest / "README.md").write_text(f"# {dest.name}\n")
        return ProviderResult(0, "", "Cloning into...\n")

    def pull(self, path: Path) -> ProviderResult:
        self.pulls.append(path)
        if path.name in self.failing_pulls:
            return ProviderResult(1, "", "fatal: unable to access remote\n")
        return ProviderResult(0, self.pull_output)

    def last_commit(self, path: Path) -> ProviderResult:
        return ProviderResult(0, "abc1234 Initial commit (2 days ago)\n")


class FakeSearch(ContentSearchProvider):
    """Returns canned lines prefixed with the searched root."""

    def __init__(self) -> None:
        self.calls: list[tuple[Path, str, str | None, int]] = []
        self.matches: dict[str, list[str]] = {}

    def search(
        self,
        root: Path,
        query: str,
        *,
        include: str | None = None,
        max_matches: int = 50,
    ) -> list[str]:
        self.calls.append((root, query, include, max_matches))
        return [f"{root}/{line}" for line in self.matches.get(root.name, [])][:max_matches]


@pytest.fixture
def layout(tmp_path: Path) -> ResourceLayout:
    return ResourceLayout(tmp_path / "global", tmp_path / "project" / ".opencode" / "resources")


@pytest.fixture
def store(layout: ResourceLayout) -> RegistryStore:
    return RegistryStore(layout)


@pytest.fixture
def vcs() -> FakeVCS:
    return FakeVCS()


@pytest.fixture
def search_provider() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def manager(layout: ResourceLayout, store: RegistryStore, vcs: FakeVCS) -> ResourceManager:
    return ResourceManager(layout=layout, store=store, vcs=vcs, files=LocalFileProvider())


@pytest.fixture
def content(
    layout: ResourceLayout, store: RegistryStore, search_provider: FakeSearch
) -> ContentService:
    return ContentService(
        layout=layout,
        store=store,
        search=search_provider,
        files=LocalFileProvider(),
        max_entries=5,
    )


@pytest.fixture
def seed(store: RegistryStore) -> Callable[..., Resource]:
    """Factory fixture: append a record to a scope's registry file."""

    def _seed(name: str, scope: Scope = Scope.GLOBAL, **fields: object) -> Resource:
        values: dict[str, object] = {
            "url": f"https://example.com/{name}.git",
            "cloned_at": OLD,
            "updated_at": OLD,
        }
        values.update(fields)
        resource = Resource(name=name, scope=scope, **values)
        registry = store.load(scope)
        registry.resources.append(resource)
        store.save(scope, registry)
        return resource

    return _seed


@pytest.fixture
def clone_dir(layout: ResourceLayout) -> Callable[..., Path]:
    """Factory fixture: create a working copy with the given files."""

    def _make(resource: Resource, files: dict[str, str] | None = None) -> Path:
        root = layout.resource_path(resource)
        root.mkdir(parents=True, exist_ok=True)
        for rel, text in (files or {"README.md": "# readme\n"}).items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        return root

    return _make
