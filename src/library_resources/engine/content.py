"""Read-only access to working-copy content: search, read and tree."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from library_resources.core.resolver import ScopeResolver
from library_resources.engine.errors import (
    FileNotFoundInResourceError,
    IsDirectoryError,
    NotClonedError,
    PathNotFoundError,
    PathOutsideResourceError,
    ProviderError,
    ResourceNotFoundError,
)
from library_resources.engine.types import FileContent, SearchResult, SearchSection, TreeListing

if TYPE_CHECKING:
    from pathlib import Path

    from library_resources.core.layout import ResourceLayout
    from library_resources.core.registry import RegistryStore, Resource
    from library_resources.providers.base import ContentSearchProvider, FileProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_MATCHES = 50
DEFAULT_MAX_ENTRIES = 100
DEFAULT_DEPTH = 3


def _inside(root: Path, relative: str) -> Path | None:
    """Resolve *relative* against *root*; None if the result leaves *root*."""
    base = root.resolve()
    candidate = (base / relative).resolve()
    if candidate == base or candidate.is_relative_to(base):
        return candidate
    return None


class ContentService:
    """Search, read and list files inside cloned resources."""

    def __init__(
        self,
        *,
        layout: ResourceLayout,
        store: RegistryStore,
        search: ContentSearchProvider,
        files: FileProvider,
        max_matches: int = DEFAULT_MAX_MATCHES,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        default_depth: int = DEFAULT_DEPTH,
    ) -> None:
        self._layout = layout
        self._resolver = ScopeResolver(store)
        self._search = search
        self._files = files
        self._max_matches = max_matches
        self._max_entries = max_entries
        self._default_depth = default_depth

    def _require(self, name: str) -> Resource:
        resource = self._resolver.find(name)
        if resource is None:
            raise ResourceNotFoundError(name)
        return resource

    def _cloned_root(self, name: str) -> Path:
        path = self._layout.resource_path(self._require(name))
        if not path.exists():
            raise NotClonedError(name)
        return path

    def search(
        self, query: str, *, name: str | None = None, include: str | None = None
    ) -> SearchResult:
        """Search one resource, or all of them, for *query*.

        Resources without a working copy are skipped.
        """
        targets = [self._require(name)] if name else self._resolver.merged()
        result = SearchResult(query=query, name=name, targets=len(targets))

        for resource in targets:
            root = self._layout.resource_path(resource)
            if not root.is_dir():
                continue
            try:
                lines = self._search.search(
                    root, query, include=include, max_matches=self._max_matches
                )
            except (ProviderError, OSError) as exc:
                logger.warning("Search failed in %s: %s", resource.name, exc)
                continue
            if lines:
                prefix = f"{root}{os.sep}"
                relative = [line.removeprefix(prefix) for line in lines]
                result.sections.append(SearchSection(name=resource.name, lines=relative))

        logger.debug("Search %r matched in %d resource(s)", query, len(result.sections))
        return result

    def read(self, name: str, file_path: str) -> FileContent:
        """Return the whole file as text. Large files are not truncated."""
        root = self._cloned_root(name)
        full = _inside(root, file_path)
        if full is None:
            raise PathOutsideResourceError(name, file_path)
        if not full.exists():
            raise FileNotFoundInResourceError(file_path)
        if full.is_dir():
            raise IsDirectoryError(file_path)
        content = full.read_text(encoding="utf-8", errors="replace")
        return FileContent(name=name, file_path=file_path, content=content)

    def tree(self, name: str, subpath: str = "", depth: int | None = None) -> TreeListing:
        """List files below *subpath*, sorted and capped at ``max_entries``."""
        depth = self._default_depth if depth is None else depth
        root = self._cloned_root(name).resolve()
        target = _inside(root, subpath) if subpath else root
        if target is None or not target.exists():
            raise PathNotFoundError(subpath)

        try:
            found = self._files.list_files(target, depth)
        except OSError as exc:
            raise ProviderError("listing files", str(exc)) from exc

        files = [p.relative_to(root).as_posix() for p in found[: self._max_entries]]
        return TreeListing(
            name=name,
            subpath=subpath,
            depth=depth,
            files=files,
            truncated=len(found) > self._max_entries,
        )
